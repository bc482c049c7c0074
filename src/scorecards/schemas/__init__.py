"""Pydantic schema definitions for scorecard documents."""

from __future__ import annotations

from .scorecard import (
    ScorecardConfig,
    ScorecardField,
    ScorecardFieldType,
    ScorecardSubmission,
    ScorecardType,
)

__all__ = [
    "ScorecardConfig",
    "ScorecardField",
    "ScorecardFieldType",
    "ScorecardSubmission",
    "ScorecardType",
]
