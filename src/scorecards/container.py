"""Dependency injection container for the scorecard tooling."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import AggregationOptions, ApplicationRanker
from .pipeline import (
    AggregationPipeline,
    OutputWriter,
    ScorecardConfigLoader,
    SubmissionLoader,
)


class ScorecardContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    aggregation_options = providers.Singleton(AggregationOptions)

    ranker = providers.Singleton(
        ApplicationRanker,
        thresholds=config.thresholds,
        descending=config.descending,
    )

    config_loader = providers.Singleton(ScorecardConfigLoader)
    submission_loader = providers.Singleton(SubmissionLoader)
    writer = providers.Singleton(OutputWriter)

    pipeline = providers.Factory(
        AggregationPipeline,
        ranker=ranker,
        options=aggregation_options,
        config_loader=config_loader,
        submission_loader=submission_loader,
        writer=writer,
    )


def create_container(*, settings: dict | None = None) -> ScorecardContainer:
    """Instantiate container with optional overrides."""

    container = ScorecardContainer()

    if not settings:
        return container

    ranking_settings = settings.get("ranking", {}) if isinstance(settings, dict) else {}
    if ranking_settings:
        container.config.override(ranking_settings)

    aggregation_settings = settings.get("aggregation", {}) if isinstance(settings, dict) else {}
    if aggregation_settings:
        options = AggregationOptions(**aggregation_settings)
        container.aggregation_options.override(providers.Object(options))

    return container
