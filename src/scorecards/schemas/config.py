"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError


class AggregationSettings(BaseModel):
    default_min: float | None = None
    default_max: float | None = None
    zero_means_unset: bool | None = None


class RankingSettings(BaseModel):
    thresholds: dict[str, float] | None = None
    descending: bool | None = None


class AppConfig(BaseModel):
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        aggregation = self.aggregation.model_dump(exclude_none=True)
        if aggregation:
            settings["aggregation"] = aggregation
        ranking = self.ranking.model_dump(exclude_none=True)
        if ranking:
            settings["ranking"] = ranking
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            AppConfig.__name__,
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
