"""Insight providers.

The dashboard asks an :class:`InsightProvider` for insights instead of
calling the rule engine directly, so an analysis backend can be swapped in
without touching the ledgers or the page code.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, runtime_checkable

from . import config
from .insights import BudgetLike, SpendingLike, generate_financial_insights

logger = logging.getLogger(__name__)

CANNED_ANALYSIS = (
    "Based on your spending patterns, you could save 12% more by switching to a "
    "high-yield savings account.",
    "Your grocery spending has increased 23% over the last 3 months. Consider meal "
    "planning to optimize costs.",
    "You're on track to meet your savings goal 2 months earlier than planned with "
    "current trends.",
)


@dataclass(frozen=True)
class InsightRequest:
    """Everything a provider needs to produce insights."""

    spending: Sequence[SpendingLike] = field(default_factory=tuple)
    budget: Sequence[BudgetLike] = field(default_factory=tuple)
    total_income: float = 0.0


@runtime_checkable
class InsightProvider(Protocol):
    def produce_insights(self, request: InsightRequest) -> List[str]:
        ...


class RuleBasedInsightProvider:
    """Insights from the built-in spending rules."""

    def produce_insights(self, request: InsightRequest) -> List[str]:
        return generate_financial_insights(request.spending, request.budget, request.total_income)


class SimulatedAIInsightProvider:
    """Stand-in for a remote analysis service.

    Pauses once for ``delay`` seconds and answers with a fixed set of
    analysis sentences regardless of the request.
    """

    def __init__(
        self,
        delay: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
        responses: Optional[Sequence[str]] = None,
    ):
        self.delay = config.AI_ANALYSIS_DELAY if delay is None else delay
        self._sleep = sleep
        self.responses = tuple(CANNED_ANALYSIS if responses is None else responses)

    def produce_insights(self, request: InsightRequest) -> List[str]:
        logger.info(
            "Running simulated analysis over %d spending categories", len(request.spending)
        )
        if self.delay > 0:
            self._sleep(self.delay)
        return list(self.responses)
