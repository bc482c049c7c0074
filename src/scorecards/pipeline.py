"""Scorecard aggregation pipeline assembly and execution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pendulum
import structlog
import yaml

from .core import AggregationOptions, ApplicationRanker, compute_aggregates
from .core.ranking import RankedApplication
from .schemas import ScorecardConfig, ScorecardSubmission
from . import __version__


class SubmissionLoadError(ValueError):
    """Raised when submission loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[ScorecardSubmission]):
        super().__init__("Submission loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Submission loading failed: {self.errors}"


class ScorecardConfigLoader:
    """Load a scorecard configuration from JSON or YAML."""

    def load(self, path: Path) -> ScorecardConfig:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix.lower() in {".yaml", ".yml"}:
                try:
                    data = yaml.safe_load(handle)
                except yaml.YAMLError as exc:
                    raise ValueError(f"Invalid scorecard YAML: {exc}") from exc
            else:
                try:
                    data = json.load(handle)
                except json.JSONDecodeError as exc:
                    raise ValueError(f"Invalid scorecard JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Scorecard configuration must be an object")
        return ScorecardConfig.model_validate(data)


class SubmissionLoader:
    """Load reviewer submissions from JSON lines."""

    def load(self, path: Path) -> list[ScorecardSubmission]:
        submissions: list[ScorecardSubmission] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: expected an object")
                    continue
                try:
                    submission = ScorecardSubmission.model_validate(record)
                except Exception as exc:  # noqa: BLE001
                    errors.append(f"line {idx}: {exc}")
                    continue
                if not submission.application_id:
                    errors.append(f"line {idx}: missing application_id field")
                    continue
                submissions.append(submission)
        if errors:
            raise SubmissionLoadError(errors, submissions)
        return submissions


class OutputWriter:
    """Persist aggregation reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class AggregationPipeline:
    """End-to-end scorecard aggregation orchestrator."""

    def __init__(
        self,
        *,
        ranker: ApplicationRanker,
        options: AggregationOptions | None = None,
        config_loader: ScorecardConfigLoader | None = None,
        submission_loader: SubmissionLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._ranker = ranker
        self._options = options or AggregationOptions()
        self._configs = config_loader or ScorecardConfigLoader()
        self._submissions = submission_loader or SubmissionLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        config_path: Path,
        submissions_path: Path,
        output_path: Path,
        descending: bool | None = None,
    ) -> list[dict]:
        config = self._configs.load(config_path)
        load_errors: list[str] = []
        try:
            submissions = self._submissions.load(submissions_path)
        except SubmissionLoadError as exc:
            submissions = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("submissions.partial_load", errors=exc.errors)

        grouped = group_by_application(_matching_system(submissions, config))

        results: list[dict] = []
        ratings: dict[str, float | None] = {}
        for application_id, entries in grouped.items():
            aggregate = compute_aggregates(entries, config, options=self._options)
            ratings[application_id] = aggregate.overall_weighted_average
            results.append({"applicationId": application_id, **aggregate.to_payload()})

            self._logger.info(
                "scorecards.result",
                application_id=application_id,
                total_submissions=aggregate.total_submissions,
                overall_weighted_average=aggregate.overall_weighted_average,
            )

        ranking = self._ranker.rank(ratings, descending=descending)

        metadata = {
            "config_id": config.id,
            "scorecard_type": config.scorecard_type.value,
            "application_count": len(grouped),
            "submission_count": sum(len(entries) for entries in grouped.values()),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        payload = {
            "metadata": metadata,
            "results": results,
            "ranking": [_ranking_entry(entry) for entry in ranking],
        }

        self._writer.write(output_path, payload)
        return results


def group_by_application(
    submissions: list[ScorecardSubmission],
) -> dict[str, list[ScorecardSubmission]]:
    """Bucket submissions per application in first-seen order."""
    grouped: dict[str, list[ScorecardSubmission]] = {}
    for submission in submissions:
        grouped.setdefault(submission.application_id or "", []).append(submission)
    return grouped


def _matching_system(
    submissions: list[ScorecardSubmission],
    config: ScorecardConfig,
) -> list[ScorecardSubmission]:
    if not config.system:
        return submissions
    return [
        submission
        for submission in submissions
        if submission.system == config.system
    ]


def _ranking_entry(entry: RankedApplication) -> dict[str, Any]:
    return {
        "applicationId": entry.application_id,
        "rating": entry.rating,
        "rank": entry.rank,
        "band": entry.band,
    }
