"""Application ranking by overall scorecard rating."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Sequence

from ..schemas import ScorecardConfig, ScorecardSubmission
from .aggregates import AggregationOptions, compute_overall_rating

RatingBand = Literal["strong", "moderate", "weak"]


@dataclass(slots=True)
class RankedApplication:
    """Position of one application in the rating order."""

    application_id: str
    rating: float | None
    rank: int | None
    band: RatingBand | None


class ApplicationRanker:
    """Orders applications by rating and assigns rating bands."""

    DEFAULT_THRESHOLDS: dict[RatingBand, float] = {
        "strong": 4.0,
        "moderate": 3.0,
    }

    def __init__(
        self,
        *,
        thresholds: dict[RatingBand, float] | None = None,
        descending: bool | None = None,
    ) -> None:
        self._thresholds = {**self.DEFAULT_THRESHOLDS, **(thresholds or {})}
        self._descending = True if descending is None else descending

    def classify(self, rating: float | None) -> RatingBand | None:
        return classify_rating(rating, self._thresholds)

    def rank(
        self,
        ratings: Mapping[str, float | None],
        *,
        descending: bool | None = None,
    ) -> list[RankedApplication]:
        order = self._descending if descending is None else descending
        return rank_applications(ratings, descending=order, thresholds=self._thresholds)


def compute_ratings(
    submissions_by_application: Mapping[str, Sequence[ScorecardSubmission | Mapping[str, Any]]],
    config: ScorecardConfig | Mapping[str, Any] | None,
    *,
    options: AggregationOptions | None = None,
) -> dict[str, float | None]:
    """Compute the overall rating of every application, keeping input order."""

    return {
        application_id: compute_overall_rating(submissions, config, options=options)
        for application_id, submissions in submissions_by_application.items()
    }


def classify_rating(
    rating: float | None,
    thresholds: Mapping[str, float] | None = None,
) -> RatingBand | None:
    """Map a rating onto the sidebar colour bands; unrated has no band."""

    if rating is None:
        return None
    limits = {**ApplicationRanker.DEFAULT_THRESHOLDS, **(thresholds or {})}
    if rating >= limits["strong"]:
        return "strong"
    if rating >= limits["moderate"]:
        return "moderate"
    return "weak"


def rank_applications(
    ratings: Mapping[str, float | None],
    *,
    descending: bool = True,
    thresholds: Mapping[str, float] | None = None,
) -> list[RankedApplication]:
    """Sort applications by rating with unrated ones last in either direction."""

    rated = [(app_id, value) for app_id, value in ratings.items() if value is not None]
    unrated = [app_id for app_id, value in ratings.items() if value is None]

    # Stable sort: ties keep input order.
    rated.sort(key=lambda item: -item[1] if descending else item[1])

    ranked = [
        RankedApplication(
            application_id=app_id,
            rating=value,
            rank=position,
            band=classify_rating(value, thresholds),
        )
        for position, (app_id, value) in enumerate(rated, start=1)
    ]
    ranked.extend(
        RankedApplication(application_id=app_id, rating=None, rank=None, band=None)
        for app_id in unrated
    )
    return ranked
