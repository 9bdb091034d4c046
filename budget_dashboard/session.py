"""Per-session state for the dashboard.

Streamlit reruns the page script on every interaction, so the ledgers
live in ``st.session_state`` and each browser session owns its own pair.
The ``state`` argument lets callers supply any mutable mapping instead.
"""

from __future__ import annotations

from typing import Any, List, MutableMapping, Optional

import streamlit as st

from .budgets import BudgetLedger
from .goals import GoalLedger
from .providers import InsightProvider, InsightRequest, RuleBasedInsightProvider, SimulatedAIInsightProvider

BUDGET_LEDGER_KEY = 'budget_ledger'
GOAL_LEDGER_KEY = 'goal_ledger'
INSIGHT_PROVIDER_KEY = 'insight_provider'
AI_PROVIDER_KEY = 'ai_insight_provider'
AI_INSIGHTS_KEY = 'ai_insights'

_SESSION_KEYS = (BUDGET_LEDGER_KEY, GOAL_LEDGER_KEY, INSIGHT_PROVIDER_KEY, AI_PROVIDER_KEY, AI_INSIGHTS_KEY)


def _state(state: Optional[MutableMapping[str, Any]]) -> MutableMapping[str, Any]:
    return st.session_state if state is None else state


def get_budget_ledger(state: Optional[MutableMapping[str, Any]] = None) -> BudgetLedger:
    session = _state(state)
    if BUDGET_LEDGER_KEY not in session:
        session[BUDGET_LEDGER_KEY] = BudgetLedger()
    return session[BUDGET_LEDGER_KEY]


def get_goal_ledger(state: Optional[MutableMapping[str, Any]] = None) -> GoalLedger:
    session = _state(state)
    if GOAL_LEDGER_KEY not in session:
        session[GOAL_LEDGER_KEY] = GoalLedger()
    return session[GOAL_LEDGER_KEY]


def get_insight_provider(state: Optional[MutableMapping[str, Any]] = None) -> InsightProvider:
    """Provider used for the insights shown on every render."""
    session = _state(state)
    if INSIGHT_PROVIDER_KEY not in session:
        session[INSIGHT_PROVIDER_KEY] = RuleBasedInsightProvider()
    return session[INSIGHT_PROVIDER_KEY]


def get_ai_provider(state: Optional[MutableMapping[str, Any]] = None) -> InsightProvider:
    """Provider behind the "AI Analysis" button."""
    session = _state(state)
    if AI_PROVIDER_KEY not in session:
        session[AI_PROVIDER_KEY] = SimulatedAIInsightProvider()
    return session[AI_PROVIDER_KEY]


def reset_session(state: Optional[MutableMapping[str, Any]] = None) -> None:
    """Drop the ledgers and cached analysis so the next render starts empty."""
    session = _state(state)
    for key in _SESSION_KEYS:
        if key in session:
            del session[key]


def store_ai_insights(
    request: InsightRequest,
    insights: List[str],
    state: Optional[MutableMapping[str, Any]] = None,
) -> None:
    """Remember an analysis together with the data it was run on."""
    _state(state)[AI_INSIGHTS_KEY] = (request, list(insights))


def get_cached_ai_insights(
    request: InsightRequest,
    state: Optional[MutableMapping[str, Any]] = None,
) -> Optional[List[str]]:
    """Return the stored analysis if it was run on ``request``.

    Any change to spending, budgets or income drops the stored analysis so
    the rule-based insights are shown for the new data.
    """
    session = _state(state)
    cached = session.get(AI_INSIGHTS_KEY)
    if cached is None:
        return None
    cached_request, insights = cached
    if cached_request != request:
        del session[AI_INSIGHTS_KEY]
        return None
    return list(insights)
