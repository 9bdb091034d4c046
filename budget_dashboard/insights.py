"""Rule-based spending insights and recommendations.

Insights are short sentences derived from category spending, category
budgets and monthly income.  Rules run in a fixed order and the list is
truncated after generation, so earlier rules take priority.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from .config import MAX_INSIGHTS, MAX_RECOMMENDATIONS
from .formatting import format_currency

LARGE_CATEGORY_SHARE = 0.3
LOW_SAVINGS_RATE = 0.10
HIGH_SAVINGS_RATE = 0.20
TREND_THRESHOLD = 0.1
INVEST_SAVINGS_RATE = 0.15
INVEST_MIN_INCOME = 50000
DEBT_KEYWORDS = ('debt', 'loan', 'credit')


@dataclass(frozen=True)
class SpendingEntry:
    category: str
    amount: float


@dataclass(frozen=True)
class BudgetLimit:
    category: str
    limit: float


@dataclass(frozen=True)
class Recommendation:
    """An actionable suggestion shown next to the insights."""

    kind: str
    title: str
    description: str
    impact: str
    actionable: bool = True


SpendingLike = Union[SpendingEntry, Mapping[str, Any]]
BudgetLike = Union[BudgetLimit, Mapping[str, Any]]


def _as_spending(entries: Iterable[SpendingLike]) -> List[SpendingEntry]:
    return [
        entry if isinstance(entry, SpendingEntry)
        else SpendingEntry(str(entry['category']), float(entry['amount']))
        for entry in entries
    ]


def _as_budget(entries: Iterable[BudgetLike]) -> List[BudgetLimit]:
    return [
        entry if isinstance(entry, BudgetLimit)
        else BudgetLimit(str(entry['category']), float(entry['limit']))
        for entry in entries
    ]


def _highest_spending(spending: Sequence[SpendingEntry]) -> Optional[SpendingEntry]:
    # Strict comparison keeps the first entry on ties
    highest = None
    for entry in spending:
        if highest is None or entry.amount > highest.amount:
            highest = entry
    return highest


def generate_financial_insights(
    spending: Iterable[SpendingLike],
    budget: Iterable[BudgetLike],
    total_income: float,
) -> List[str]:
    """Generate at most three insights, highest priority first.

    Args:
        spending: Amount spent per category, in display order
        budget: Spending limit per category
        total_income: Monthly income the spending is compared against

    Returns:
        Insight sentences: over-budget warnings, then the dominant
        category, then the savings-rate verdict.
    """
    spending = _as_spending(spending)
    budget = _as_budget(budget)
    insights: List[str] = []

    for entry in spending:
        limit = next((item for item in budget if item.category == entry.category), None)
        if limit is not None and entry.amount > limit.limit:
            overspent = entry.amount - limit.limit
            insights.append(
                f"You've exceeded your {entry.category} budget by {format_currency(overspent)}"
            )

    highest = _highest_spending(spending)
    if highest is not None and highest.amount > total_income * LARGE_CATEGORY_SHARE:
        insights.append(
            f"{highest.category} accounts for a large portion of your spending. "
            "Consider reviewing these expenses."
        )

    if total_income != 0:
        total_spending = sum(entry.amount for entry in spending)
        savings_rate = (total_income - total_spending) / total_income
        if savings_rate < LOW_SAVINGS_RATE:
            insights.append("Your savings rate is below 10%. Try to reduce expenses or increase income.")
        elif savings_rate > HIGH_SAVINGS_RATE:
            insights.append("Great job! You're saving over 20% of your income.")

    return insights[:MAX_INSIGHTS]


def get_spending_trend(points: Iterable[Any]) -> str:
    """Classify spending over time as increasing, decreasing or stable.

    ``points`` are ``(date, amount)`` pairs or mappings with ``date`` and
    ``amount`` keys.  The mean of the later half is compared with the mean
    of the earlier half.
    """
    rows = [
        (point['date'], point['amount']) if isinstance(point, Mapping) else tuple(point)
        for point in points
    ]
    if len(rows) < 2:
        return 'stable'

    frame = pd.DataFrame(rows, columns=['date', 'amount'])
    frame['date'] = pd.to_datetime(frame['date'])
    frame['amount'] = pd.to_numeric(frame['amount'])
    frame = frame.sort_values('date', kind='stable').reset_index(drop=True)

    midpoint = len(frame) // 2
    first_avg = frame['amount'].iloc[:midpoint].mean()
    second_avg = frame['amount'].iloc[midpoint:].mean()
    if first_avg == 0:
        return 'increasing' if second_avg > 0 else 'stable'

    difference = (second_avg - first_avg) / first_avg
    if difference > TREND_THRESHOLD:
        return 'increasing'
    if difference < -TREND_THRESHOLD:
        return 'decreasing'
    return 'stable'


def generate_recommendations(
    spending: Iterable[SpendingLike],
    total_income: float,
    savings_rate: float,
) -> List[Recommendation]:
    """Suggest next steps; ``savings_rate`` is a fraction (0.12 for 12%)."""
    spending = _as_spending(spending)
    recommendations: List[Recommendation] = []

    if savings_rate < LOW_SAVINGS_RATE:
        recommendations.append(Recommendation(
            kind='save',
            title="Boost Your Emergency Fund",
            description=(
                "Your savings rate is below 10%. Consider automating savings "
                "transfers to build your emergency fund."
            ),
            impact="Could save you $100-500/month",
        ))

    highest = _highest_spending(spending)
    if highest is not None and highest.amount > total_income * LARGE_CATEGORY_SHARE:
        recommendations.append(Recommendation(
            kind='budget',
            title=f"Optimize {highest.category} Spending",
            description=(
                f"Your {highest.category} spending is high. Look for alternatives "
                "or negotiate better rates."
            ),
            impact=f"Potential savings: {format_currency(highest.amount * 0.1)}/month",
        ))

    if savings_rate > INVEST_SAVINGS_RATE and total_income > INVEST_MIN_INCOME:
        recommendations.append(Recommendation(
            kind='invest',
            title="Consider Investment Opportunities",
            description=(
                "With your healthy savings rate, you might benefit from "
                "low-risk investment options."
            ),
            impact="Potential 5-8% annual returns",
        ))

    debt_spending = [
        entry for entry in spending
        if any(keyword in entry.category.lower() for keyword in DEBT_KEYWORDS)
    ]
    if debt_spending:
        total_debt = sum(entry.amount for entry in debt_spending)
        recommendations.append(Recommendation(
            kind='debt',
            title="Debt Consolidation Strategy",
            description="Consider consolidating high-interest debts to reduce monthly payments.",
            impact=f"Potential savings: {format_currency(total_debt * 0.05)}/month",
        ))

    recommendations.append(Recommendation(
        kind='general',
        title="Monthly Financial Review",
        description="Schedule monthly reviews to track progress and adjust your budget as needed.",
        impact="Better financial awareness",
    ))

    return recommendations[:MAX_RECOMMENDATIONS]
