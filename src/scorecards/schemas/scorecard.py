"""Scorecard configuration and submission schemas."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class ScorecardFieldType(str, Enum):
    """Kinds of fields a reviewer can fill in."""

    RATING = "rating"
    BOOLEAN = "boolean"
    TEXT = "text"
    LONG_TEXT = "long_text"


class ScorecardType(str, Enum):
    """Stage of the recruiting process a scorecard belongs to."""

    APPLICATION = "application"
    INTERVIEW = "interview"


class ScorecardField(BaseModel):
    """Single scorable field of a scorecard configuration."""

    id: str = Field(..., min_length=1)
    label: str = ""
    type: ScorecardFieldType
    min: int | float | None = None
    max: int | float | None = None
    weight: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    required: bool = False
    description: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    @field_validator("min", "max")
    @classmethod
    def _finite_bounds(cls, value: int | float | None) -> int | float | None:
        if value is not None and not math.isfinite(value):
            raise ValueError("bounds must be finite numbers")
        return value

    @model_validator(mode="after")
    def _check_bounds(self) -> "ScorecardField":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"field {self.id!r}: min must not exceed max")
        return self


class ScorecardConfig(BaseModel):
    """Ordered field definitions staff use to evaluate an application."""

    id: str | None = None
    team: str | None = None
    system: str | None = None
    scorecard_type: ScorecardType = ScorecardType.APPLICATION
    fields: list[ScorecardField] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    @field_validator("fields")
    @classmethod
    def _unique_ids(cls, fields: list[ScorecardField]) -> list[ScorecardField]:
        seen: set[str] = set()
        for item in fields:
            if item.id in seen:
                raise ValueError(f"duplicate field id: {item.id!r}")
            seen.add(item.id)
        return fields


class ScorecardSubmission(BaseModel):
    """One reviewer's filled-in scorecard for one application."""

    id: str | None = None
    application_id: str | None = None
    reviewer_id: str | None = None
    reviewer_name: str | None = None
    system: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    submitted_at: str | None = None
    updated_at: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )
