from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from scorecards.pipeline import (
    ScorecardConfigLoader,
    SubmissionLoadError,
    SubmissionLoader,
    group_by_application,
)


def test_submission_loader_raises_on_invalid_json(tmp_path: Path):
    loader = SubmissionLoader()
    path = tmp_path / "submissions.jsonl"
    path.write_text('{"applicationId": "APP-1", "data": {}}\n{invalid}', encoding="utf-8")

    with pytest.raises(SubmissionLoadError) as exc:
        loader.load(path)
    assert "invalid JSON" in str(exc.value)
    assert len(exc.value.partial) == 1


def test_submission_loader_skips_invalid_and_reports(tmp_path: Path):
    loader = SubmissionLoader()
    path = tmp_path / "submissions.jsonl"
    records = [
        {"applicationId": "APP-1", "reviewerName": "Ada", "data": {"fit": 4}},
        {"data": {"fit": 2}},
        {"applicationId": "APP-2", "data": "not-a-mapping"},
    ]
    path.write_text(
        "\n".join(json.dumps(record) for record in records) + "\n\n",
        encoding="utf-8",
    )

    with pytest.raises(SubmissionLoadError) as exc:
        loader.load(path)
    error = exc.value
    assert "missing application_id" in error.errors[0]
    assert error.errors[1].startswith("line 3:")
    assert [item.reviewer_name for item in error.partial] == ["Ada"]


def test_group_by_application_keeps_first_seen_order(tmp_path: Path):
    path = tmp_path / "submissions.jsonl"
    path.write_text(
        "\n".join(
            json.dumps({"application_id": app_id, "data": {}})
            for app_id in ["APP-2", "APP-1", "APP-2"]
        ),
        encoding="utf-8",
    )

    grouped = group_by_application(SubmissionLoader().load(path))

    assert list(grouped) == ["APP-2", "APP-1"]
    assert len(grouped["APP-2"]) == 2


def test_config_loader_reads_yaml(tmp_path: Path):
    path = tmp_path / "scorecard.yaml"
    path.write_text(
        "id: SC-1\n"
        "scorecardType: interview\n"
        "fields:\n"
        "  - id: fit\n"
        "    label: Fit\n"
        "    type: rating\n"
        "    weight: 2\n",
        encoding="utf-8",
    )

    config = ScorecardConfigLoader().load(path)

    assert config.scorecard_type.value == "interview"
    assert config.fields[0].weight == 2


def test_config_loader_invalid_json(tmp_path: Path):
    path = tmp_path / "scorecard.json"
    path.write_text("{invalid", encoding="utf-8")

    with pytest.raises(ValueError):
        ScorecardConfigLoader().load(path)


def test_config_loader_rejects_duplicate_fields(tmp_path: Path):
    path = tmp_path / "scorecard.json"
    field = {"id": "fit", "label": "Fit", "type": "rating"}
    path.write_text(json.dumps({"fields": [field, field]}), encoding="utf-8")

    with pytest.raises(ValidationError):
        ScorecardConfigLoader().load(path)


def test_config_loader_rejects_infinite_weight(tmp_path: Path):
    path = tmp_path / "scorecard.json"
    path.write_text(
        '{"fields": [{"id": "fit", "label": "Fit", "type": "rating", "weight": Infinity}]}',
        encoding="utf-8",
    )

    with pytest.raises(ValidationError):
        ScorecardConfigLoader().load(path)
