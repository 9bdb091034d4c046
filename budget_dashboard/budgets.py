"""Budget categories and the in-memory budget ledger.

Each :class:`BudgetCategory` carries derived fields (remaining,
percentage used and status) that are only ever produced by
:func:`recompute_budget_category`.  The ledger swaps in a freshly
recomputed record on every mutation, so a category never shows derived
values that disagree with its budgeted/spent pair.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

import pandas as pd

from .errors import RecordNotFoundError, ValidationError
from .insights import BudgetLimit, SpendingEntry

logger = logging.getLogger(__name__)

DANGER_PERCENTAGE = 100.0
WARNING_PERCENTAGE = 80.0


class BudgetStatus(str, Enum):
    GOOD = 'good'
    WARNING = 'warning'
    DANGER = 'danger'


@dataclass(frozen=True)
class BudgetCategory:
    """Planned versus actual spending for one category."""

    id: str
    name: str
    budgeted: float
    spent: float = 0.0
    remaining: float = 0.0
    percentage: float = 0.0
    status: BudgetStatus = BudgetStatus.GOOD

    @classmethod
    def create(cls, name: str, budgeted: float, spent: float = 0.0,
               id: Optional[str] = None) -> "BudgetCategory":
        """Build a category with its derived fields filled in."""
        category = cls(id=id or uuid.uuid4().hex, name=name, budgeted=float(budgeted), spent=float(spent))
        return recompute_budget_category(category)


def _status_for(percentage: float) -> BudgetStatus:
    if percentage > DANGER_PERCENTAGE:
        return BudgetStatus.DANGER
    if percentage > WARNING_PERCENTAGE:
        return BudgetStatus.WARNING
    return BudgetStatus.GOOD


def recompute_budget_category(category: BudgetCategory) -> BudgetCategory:
    """Return a copy of ``category`` with derived fields recalculated."""
    percentage = (category.spent / category.budgeted * 100) if category.budgeted > 0 else 0.0
    return replace(
        category,
        remaining=category.budgeted - category.spent,
        percentage=percentage,
        status=_status_for(percentage),
    )


def validate_budget_amount(amount: float) -> float:
    """Return ``amount`` as a float or raise if it is not a positive number."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationError(f"Budget must be a number, got {amount!r}", field='budgeted') from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Budget must be a positive amount", field='budgeted')
    return value


def validate_spent_amount(amount: float) -> float:
    """Return ``amount`` as a float or raise if it is negative or not a number."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationError(f"Spent must be a number, got {amount!r}", field='spent') from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError("Spent cannot be negative", field='spent')
    return value


def validate_new_category(name: str, budgeted: float) -> Tuple[str, float]:
    """Check the inputs of :meth:`BudgetLedger.add_category`.

    Returns:
        The stripped name and the budget as a float

    Raises:
        ValidationError: If the name is blank or the budget is not positive
    """
    clean_name = name.strip() if isinstance(name, str) else ''
    if not clean_name:
        raise ValidationError("Category name is required", field='name')
    return clean_name, validate_budget_amount(budgeted)


class BudgetLedger:
    """Budget categories owned by a single dashboard session."""

    def __init__(self, categories: Iterable[BudgetCategory] = ()):
        self._categories: List[BudgetCategory] = [
            recompute_budget_category(category) for category in categories
        ]

    def __iter__(self) -> Iterator[BudgetCategory]:
        return iter(tuple(self._categories))

    def __len__(self) -> int:
        return len(self._categories)

    @property
    def categories(self) -> Tuple[BudgetCategory, ...]:
        return tuple(self._categories)

    def get(self, category_id: str) -> Optional[BudgetCategory]:
        return next((c for c in self._categories if c.id == category_id), None)

    def _index_of(self, category_id: str) -> int:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                return index
        raise RecordNotFoundError(category_id, kind='budget category')

    def edit_budget(self, category_id: str, new_budgeted: float) -> Optional[BudgetCategory]:
        """Change a category's budget and recompute its derived fields.

        Unknown ids and non-positive amounts are rejected rather than
        clamped: the ledger is left untouched and ``None`` is returned.
        """
        try:
            index = self._index_of(category_id)
            amount = validate_budget_amount(new_budgeted)
        except (RecordNotFoundError, ValidationError) as exc:
            logger.warning("Rejected budget edit for %s: %s", category_id, exc)
            return None

        updated = recompute_budget_category(replace(self._categories[index], budgeted=amount))
        self._categories[index] = updated
        logger.debug("Budget for %s set to %.2f (%s)", updated.name, amount, updated.status.value)
        return updated

    def record_spending(self, category_id: str, spent: float) -> Optional[BudgetCategory]:
        """Replace a category's spent-to-date total and recompute it.

        Spending comes from outside the ledger (statements, manual entry).
        Unknown ids and negative amounts leave the ledger untouched.
        """
        try:
            index = self._index_of(category_id)
            amount = validate_spent_amount(spent)
        except (RecordNotFoundError, ValidationError) as exc:
            logger.warning("Rejected spending update for %s: %s", category_id, exc)
            return None

        updated = recompute_budget_category(replace(self._categories[index], spent=amount))
        self._categories[index] = updated
        logger.debug("Spent for %s set to %.2f (%s)", updated.name, amount, updated.status.value)
        return updated

    def add_category(self, name: str, budgeted: float) -> Optional[BudgetCategory]:
        """Append a new category with nothing spent yet.

        Invalid input is a silent no-op that returns ``None``; call
        :func:`validate_new_category` first to get an error message.
        """
        try:
            clean_name, amount = validate_new_category(name, budgeted)
        except ValidationError as exc:
            logger.warning("Rejected new budget category %r: %s", name, exc)
            return None

        category = BudgetCategory(
            id=uuid.uuid4().hex,
            name=clean_name,
            budgeted=amount,
            spent=0.0,
            remaining=amount,
            percentage=0.0,
            status=BudgetStatus.GOOD,
        )
        self._categories.append(category)
        logger.debug("Added budget category %s with %.2f", clean_name, amount)
        return category

    @property
    def total_budgeted(self) -> float:
        return sum(c.budgeted for c in self._categories)

    @property
    def total_spent(self) -> float:
        return sum(c.spent for c in self._categories)

    @property
    def overall_progress(self) -> float:
        """Percentage of the combined budget already spent."""
        total = self.total_budgeted
        return (self.total_spent / total * 100) if total > 0 else 0.0

    @property
    def is_over_budget(self) -> bool:
        return self.total_spent > self.total_budgeted

    def spending_entries(self) -> List[SpendingEntry]:
        return [SpendingEntry(c.name, c.spent) for c in self._categories]

    def budget_limits(self) -> List[BudgetLimit]:
        return [BudgetLimit(c.name, c.budgeted) for c in self._categories]

    def to_frame(self) -> pd.DataFrame:
        """Budget performance table, one row per category."""
        columns = ['Category', 'Budget', 'Actual', 'Remaining', 'Percentage_Used', 'Status']
        rows = [
            {
                'Category': c.name,
                'Budget': c.budgeted,
                'Actual': c.spent,
                'Remaining': c.remaining,
                'Percentage_Used': c.percentage,
                'Status': c.status.value,
            }
            for c in self._categories
        ]
        return pd.DataFrame(rows, columns=columns)
