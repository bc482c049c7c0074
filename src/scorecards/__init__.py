"""Scorecard aggregation tooling for the recruiting portal."""

from __future__ import annotations

__version__ = "0.1.0"
