"""Configuration management for the budget dashboard.

This module centralizes configuration values and their environment
variable overrides, plus the logging setup used by the entry points.
"""

from __future__ import annotations

import logging
import os
import sys

DEFAULT_AI_ANALYSIS_DELAY = 2.0

LOG_LEVEL = os.getenv("BUDGET_DASHBOARD_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Insight lists shown on the dashboard
MAX_INSIGHTS = 3
MAX_RECOMMENDATIONS = 4


def _read_delay(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_AI_ANALYSIS_DELAY
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_AI_ANALYSIS_DELAY
    if value < 0 or value != value:
        return DEFAULT_AI_ANALYSIS_DELAY
    return value


# Seconds the simulated AI analysis pauses before answering
AI_ANALYSIS_DELAY = _read_delay(os.getenv("BUDGET_DASHBOARD_AI_DELAY"))


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the dashboard process."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
