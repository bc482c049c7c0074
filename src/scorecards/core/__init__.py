"""Core scorecard aggregation components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregates import (
    AGGREGATED_FIELD_TYPES,
    AggregateData,
    AggregateScore,
    AggregationOptions,
    compute_aggregates,
    compute_overall_rating,
    numeric_value,
    round2,
)
from .ranking import (
    ApplicationRanker,
    RankedApplication,
    classify_rating,
    compute_ratings,
    rank_applications,
)

__all__ = [
    "AGGREGATED_FIELD_TYPES",
    "AggregateData",
    "AggregateScore",
    "AggregationOptions",
    "ApplicationRanker",
    "RankedApplication",
    "classify_rating",
    "compute_aggregates",
    "compute_overall_rating",
    "compute_ratings",
    "numeric_value",
    "rank_applications",
    "round2",
]
