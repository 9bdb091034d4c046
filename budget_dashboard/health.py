"""Financial health scoring.

The health score is a piecewise step function over three ratios of the
monthly income: expenses, savings and debt.  Each ratio contributes an
independent delta to a base score of 100 and the total is clamped to
``[0, 100]`` once all deltas have been applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

BASE_SCORE = 100.0

# (threshold, delta) pairs, checked in order, first match wins
EXPENSE_RULES = ((0.8, -30.0), (0.6, -15.0))
DEBT_RULES = ((0.4, -25.0), (0.2, -10.0))
HIGH_SAVINGS_RATIO = 0.2
HIGH_SAVINGS_BONUS = 10.0
LOW_SAVINGS_RATIO = 0.1
LOW_SAVINGS_PENALTY = -20.0

HEALTH_LABELS = (
    (80.0, "Excellent financial health!"),
    (60.0, "Good financial health with room for improvement"),
    (40.0, "Fair financial health - focus on reducing expenses"),
)
POOR_HEALTH_LABEL = "Poor financial health - immediate attention needed"

_SNAPSHOT_KEYS = {
    'total_income': 'totalIncome',
    'total_expenses': 'totalExpenses',
    'total_savings': 'totalSavings',
    'total_debt': 'totalDebt',
}


@dataclass(frozen=True)
class FinancialSnapshot:
    """Read-only totals supplied by the caller for scoring."""

    total_income: float = 0.0
    total_expenses: float = 0.0
    total_savings: float = 0.0
    total_debt: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FinancialSnapshot":
        """Build a snapshot from snake_case or camelCase keys."""
        values: Dict[str, float] = {}
        for field_name, camel_name in _SNAPSHOT_KEYS.items():
            raw = data.get(field_name, data.get(camel_name, 0.0))
            values[field_name] = float(raw or 0.0)
        return cls(**values)


def _step_delta(ratio: float, rules) -> float:
    for threshold, delta in rules:
        if ratio > threshold:
            return delta
    return 0.0


def calculate_financial_health(snapshot: FinancialSnapshot) -> float:
    """Score the snapshot between 0 and 100.

    Returns 0 when there is no income to compare against.
    """
    income = snapshot.total_income
    if income == 0:
        return 0.0

    expense_ratio = snapshot.total_expenses / income
    savings_ratio = snapshot.total_savings / income
    debt_ratio = snapshot.total_debt / income

    score = BASE_SCORE
    score += _step_delta(expense_ratio, EXPENSE_RULES)

    if savings_ratio > HIGH_SAVINGS_RATIO:
        score += HIGH_SAVINGS_BONUS
    elif savings_ratio < LOW_SAVINGS_RATIO:
        score += LOW_SAVINGS_PENALTY

    score += _step_delta(debt_ratio, DEBT_RULES)

    return max(0.0, min(BASE_SCORE, score))


def health_label(score: float) -> str:
    """Describe a health score in words."""
    for floor, label in HEALTH_LABELS:
        if score >= floor:
            return label
    return POOR_HEALTH_LABEL


def summarize_overview(snapshot: FinancialSnapshot) -> Dict[str, Any]:
    """Calculate the headline numbers for the overview panel."""
    score = calculate_financial_health(snapshot)
    leftover = snapshot.total_income - snapshot.total_expenses
    savings_rate = (leftover / snapshot.total_income * 100) if snapshot.total_income > 0 else 0.0

    return {
        'health_score': score,
        'health_label': health_label(score),
        'net_worth': snapshot.total_savings - snapshot.total_debt,
        'monthly_leftover': leftover,
        'savings_rate': savings_rate,
    }
