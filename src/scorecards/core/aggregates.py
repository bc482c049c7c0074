"""Scorecard aggregation engine.

Turns per-reviewer scorecard submissions into per-field statistics and a single
overall weighted average. The same calculation backs the applications sidebar,
the scorecard detail view and ranking, so every call site must agree on the
rounding and fallback rules implemented here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Sequence

from ..schemas import (
    ScorecardConfig,
    ScorecardField,
    ScorecardFieldType,
    ScorecardSubmission,
)

# Every field kind must appear here; a missing kind fails loudly in _aggregates().
AGGREGATED_FIELD_TYPES: dict[ScorecardFieldType, bool] = {
    ScorecardFieldType.RATING: True,
    ScorecardFieldType.BOOLEAN: False,
    ScorecardFieldType.TEXT: False,
    ScorecardFieldType.LONG_TEXT: False,
}

_CENT = Decimal("0.01")


@dataclass
class AggregationOptions:
    """Fallbacks applied when a field leaves its bounds unset."""

    default_min: int | float = 1
    default_max: int | float = 5
    zero_means_unset: bool = False


@dataclass(slots=True)
class AggregateScore:
    """Summary of one rating field across all submissions."""

    field_id: str
    field_label: str
    average: float
    count: int
    min: int | float
    max: int | float
    weight: float | None = None
    weighted_average: float | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "fieldId": self.field_id,
            "fieldLabel": self.field_label,
            "average": self.average,
            "count": self.count,
            "min": self.min,
            "max": self.max,
        }
        if self.weight is not None:
            payload["weight"] = self.weight
        if self.weighted_average is not None:
            payload["weightedAverage"] = self.weighted_average
        return payload


@dataclass(slots=True)
class AggregateData:
    """Aggregates for one application's submissions."""

    total_submissions: int
    scores: list[AggregateScore] = field(default_factory=list)
    overall_weighted_average: float | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "scores": [score.to_payload() for score in self.scores],
            "totalSubmissions": self.total_submissions,
        }
        if self.overall_weighted_average is not None:
            payload["overallWeightedAverage"] = self.overall_weighted_average
        return payload


def round2(value: float) -> float:
    """Round half away from zero to two decimal places.

    The float's shortest repr is rounded, so ``2.005`` becomes ``2.01`` even
    though its binary value sits just below the midpoint. Infinities and NaN
    are returned unchanged.
    """

    if not math.isfinite(value):
        return value
    return float(Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def numeric_value(value: Any) -> float | None:
    """Return ``value`` as a float when it is a finite number, else None."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def compute_aggregates(
    submissions: Sequence[ScorecardSubmission | Mapping[str, Any]],
    config: ScorecardConfig | Mapping[str, Any] | None,
    *,
    options: AggregationOptions | None = None,
) -> AggregateData:
    """Calculate per-field and overall aggregates for a set of submissions."""

    total = len(submissions)
    if config is None:
        return AggregateData(total_submissions=total)

    scorecard = _as_config(config)
    rating_fields = [item for item in scorecard.fields if _aggregates(item)]
    if total == 0 or not rating_fields:
        return AggregateData(total_submissions=total)

    opts = options or AggregationOptions()
    entries = [_as_submission(item) for item in submissions]
    scores = [_score_field(item, entries, opts) for item in rating_fields]

    return AggregateData(
        total_submissions=total,
        scores=scores,
        overall_weighted_average=_overall(scores),
    )


def compute_overall_rating(
    submissions: Sequence[ScorecardSubmission | Mapping[str, Any]],
    config: ScorecardConfig | Mapping[str, Any] | None,
    *,
    options: AggregationOptions | None = None,
) -> float | None:
    """Return only the overall weighted average, or None when nothing was rated."""

    return compute_aggregates(submissions, config, options=options).overall_weighted_average


def _aggregates(item: ScorecardField) -> bool:
    try:
        return AGGREGATED_FIELD_TYPES[item.type]
    except KeyError as exc:
        raise ValueError(f"No aggregation rule for field type {item.type!r}") from exc


def _score_field(
    item: ScorecardField,
    submissions: Iterable[ScorecardSubmission],
    options: AggregationOptions,
) -> AggregateScore:
    values = [
        number
        for number in (numeric_value(sub.data.get(item.id)) for sub in submissions)
        if number is not None
    ]
    lower = _bound(item.min, options.default_min, options)
    upper = _bound(item.max, options.default_max, options)

    if not values:
        return AggregateScore(
            field_id=item.id,
            field_label=item.label,
            average=0.0,
            count=0,
            min=lower,
            max=upper,
            weight=item.weight,
        )

    mean = sum(values) / len(values)
    # The weighted figure uses the unrounded mean; only the overall step sees rounded averages.
    weighted = round2(mean * item.weight) if item.weight is not None else None
    return AggregateScore(
        field_id=item.id,
        field_label=item.label,
        average=round2(mean),
        count=len(values),
        min=lower,
        max=upper,
        weight=item.weight,
        weighted_average=weighted,
    )


def _overall(scores: Iterable[AggregateScore]) -> float | None:
    scored = [score for score in scores if score.count > 0]
    if not scored:
        return None
    weights_total = sum(_effective_weight(score) for score in scored)
    weighted_sum = sum(score.average * _effective_weight(score) for score in scored)
    return round2(weighted_sum / weights_total)


def _effective_weight(score: AggregateScore) -> float:
    return score.weight if score.weight is not None else 1.0


def _bound(
    value: int | float | None,
    default: int | float,
    options: AggregationOptions,
) -> int | float:
    if value is None or (options.zero_means_unset and value == 0):
        return default
    return value


def _as_config(config: ScorecardConfig | Mapping[str, Any]) -> ScorecardConfig:
    if isinstance(config, ScorecardConfig):
        return config
    return ScorecardConfig.model_validate(config)


def _as_submission(item: ScorecardSubmission | Mapping[str, Any]) -> ScorecardSubmission:
    if isinstance(item, ScorecardSubmission):
        return item
    return ScorecardSubmission.model_validate(item)
