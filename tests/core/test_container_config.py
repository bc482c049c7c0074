from __future__ import annotations

import pytest
from pydantic import ValidationError

from scorecards.container import create_container
from scorecards.pipeline import AggregationPipeline
from scorecards.schemas.config import AppConfig, load_config


def test_create_container_defaults():
    container = create_container()

    options = container.aggregation_options()
    ranker = container.ranker()

    assert (options.default_min, options.default_max) == (1.0, 5.0)
    assert options.zero_means_unset is False
    assert ranker._descending is True
    assert ranker._thresholds == {"strong": 4.0, "moderate": 3.0}
    assert isinstance(container.pipeline(), AggregationPipeline)


def test_create_container_with_overrides():
    container = create_container(
        settings={
            "aggregation": {"default_max": 10, "zero_means_unset": True},
            "ranking": {"thresholds": {"strong": 8.0, "moderate": 5.0}, "descending": False},
        }
    )

    options = container.aggregation_options()
    ranker = container.ranker()
    pipeline = container.pipeline()

    assert options.default_max == 10
    assert options.zero_means_unset is True
    assert ranker._thresholds["strong"] == 8.0
    assert ranker._descending is False
    assert pipeline._options is options


def test_load_config_validation():
    data = {
        "aggregation": {"zero_means_unset": True},
        "ranking": {"thresholds": {"strong": 4.2}},
    }
    app_config = load_config(data)
    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["aggregation"] == {"zero_means_unset": True}
    assert settings["ranking"]["thresholds"]["strong"] == 4.2


def test_load_config_rejects_non_mapping():
    with pytest.raises(ValidationError):
        load_config(["not", "a", "mapping"])


def test_empty_config_produces_no_settings():
    assert load_config({}).to_settings() == {}
