"""Savings goals and the in-memory goal ledger.

Goal progress only moves forward: contributions add to the saved amount
and there is no withdrawal.  Progress is not capped at the target, a goal
that overshoots simply stays ``completed``.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

import pandas as pd

from .errors import RecordNotFoundError, ValidationError

logger = logging.getLogger(__name__)

COMPLETED_PROGRESS = 100.0
AHEAD_PROGRESS = 80.0
ON_TRACK_PROGRESS = 40.0


class GoalCategory(str, Enum):
    EMERGENCY = 'emergency'
    VACATION = 'vacation'
    HOUSE = 'house'
    RETIREMENT = 'retirement'
    DEBT = 'debt'
    OTHER = 'other'


class GoalPriority(str, Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'


class GoalStatus(str, Enum):
    ON_TRACK = 'on-track'
    AHEAD = 'ahead'
    BEHIND = 'behind'
    COMPLETED = 'completed'


@dataclass(frozen=True)
class SavingsGoal:
    """A savings target with its current progress."""

    id: str
    title: str
    target_amount: float
    deadline: date
    category: GoalCategory = GoalCategory.OTHER
    priority: GoalPriority = GoalPriority.MEDIUM
    monthly_contribution: float = 0.0
    current_amount: float = 0.0
    progress: float = 0.0
    status: GoalStatus = GoalStatus.ON_TRACK

    @property
    def remaining_amount(self) -> float:
        return self.target_amount - self.current_amount

    @property
    def months_to_goal(self) -> float:
        """Months of contributions still needed at the current monthly rate."""
        if self.remaining_amount <= 0:
            return 0.0
        if self.monthly_contribution <= 0:
            return float('inf')
        return self.remaining_amount / self.monthly_contribution


def _status_for(progress: float) -> GoalStatus:
    if progress >= COMPLETED_PROGRESS:
        return GoalStatus.COMPLETED
    if progress >= AHEAD_PROGRESS:
        return GoalStatus.AHEAD
    if progress >= ON_TRACK_PROGRESS:
        return GoalStatus.ON_TRACK
    return GoalStatus.BEHIND


def recompute_goal(goal: SavingsGoal) -> SavingsGoal:
    """Return a copy of ``goal`` with progress and status recalculated."""
    progress = (goal.current_amount / goal.target_amount * 100) if goal.target_amount > 0 else 0.0
    return replace(goal, progress=progress, status=_status_for(progress))


def _parse_deadline(deadline: Union[date, datetime, str]) -> date:
    if isinstance(deadline, datetime):
        return deadline.date()
    if isinstance(deadline, date):
        return deadline
    parsed = pd.to_datetime(deadline, errors='coerce') if deadline else pd.NaT
    if pd.isna(parsed):
        raise ValidationError(f"Deadline is not a valid date: {deadline!r}", field='deadline')
    return parsed.date()


def _parse_amount(value: Any, field_name: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number, got {value!r}", field=field_name) from None
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError(f"{field_name} must be a positive amount", field=field_name)
    return amount


def validate_new_goal(
    title: str,
    target_amount: float,
    deadline: Union[date, datetime, str],
    category: Union[GoalCategory, str] = GoalCategory.OTHER,
) -> Tuple[str, float, date, GoalCategory]:
    """Check the inputs of :meth:`GoalLedger.add_goal`.

    Returns:
        Normalised title, target amount, deadline and category

    Raises:
        ValidationError: On a blank title, a non-positive target, an
            unparseable deadline or an unknown category
    """
    clean_title = title.strip() if isinstance(title, str) else ''
    if not clean_title:
        raise ValidationError("Goal title is required", field='title')
    target = _parse_amount(target_amount, 'target_amount')
    parsed_deadline = _parse_deadline(deadline)
    try:
        goal_category = GoalCategory(category)
    except ValueError:
        raise ValidationError(f"Unknown goal category: {category!r}", field='category') from None
    return clean_title, target, parsed_deadline, goal_category


def validate_contribution(amount: float) -> float:
    return _parse_amount(amount, 'amount')


class GoalLedger:
    """Savings goals owned by a single dashboard session."""

    def __init__(self, goals: Iterable[SavingsGoal] = ()):
        self._goals: List[SavingsGoal] = [recompute_goal(goal) for goal in goals]

    def __iter__(self) -> Iterator[SavingsGoal]:
        return iter(tuple(self._goals))

    def __len__(self) -> int:
        return len(self._goals)

    @property
    def goals(self) -> Tuple[SavingsGoal, ...]:
        return tuple(self._goals)

    def get(self, goal_id: str) -> Optional[SavingsGoal]:
        return next((g for g in self._goals if g.id == goal_id), None)

    def _index_of(self, goal_id: str) -> int:
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return index
        raise RecordNotFoundError(goal_id, kind='goal')

    def add_goal(
        self,
        title: str,
        target_amount: float,
        deadline: Union[date, datetime, str],
        category: Union[GoalCategory, str] = GoalCategory.OTHER,
        monthly_contribution: Optional[float] = 0.0,
    ) -> Optional[SavingsGoal]:
        """Create a goal with nothing saved yet.

        New goals start ``on-track`` with medium priority.  Invalid input
        leaves the ledger unchanged and returns ``None``.
        """
        try:
            clean_title, target, parsed_deadline, goal_category = validate_new_goal(
                title, target_amount, deadline, category
            )
        except ValidationError as exc:
            logger.warning("Rejected new goal %r: %s", title, exc)
            return None

        try:
            contribution = float(monthly_contribution or 0.0)
        except (TypeError, ValueError):
            contribution = 0.0
        if not math.isfinite(contribution):
            contribution = 0.0

        goal = SavingsGoal(
            id=uuid.uuid4().hex,
            title=clean_title,
            target_amount=target,
            deadline=parsed_deadline,
            category=goal_category,
            priority=GoalPriority.MEDIUM,
            monthly_contribution=contribution,
            current_amount=0.0,
            progress=0.0,
            status=GoalStatus.ON_TRACK,
        )
        self._goals.append(goal)
        logger.debug("Added goal %s targeting %.2f by %s", clean_title, target, parsed_deadline)
        return goal

    def contribute_to_goal(self, goal_id: str, amount: float) -> Optional[SavingsGoal]:
        """Add ``amount`` to a goal's savings and recompute its progress.

        Completed goals still accept contributions.  Unknown ids and
        non-positive amounts are ignored and ``None`` is returned.
        """
        try:
            index = self._index_of(goal_id)
            value = validate_contribution(amount)
        except (RecordNotFoundError, ValidationError) as exc:
            logger.warning("Rejected contribution to %s: %s", goal_id, exc)
            return None

        current = self._goals[index]
        updated = recompute_goal(replace(current, current_amount=current.current_amount + value))
        self._goals[index] = updated
        logger.debug(
            "Goal %s now at %.2f of %.2f (%s)",
            updated.title, updated.current_amount, updated.target_amount, updated.status.value,
        )
        return updated

    @property
    def active_goals(self) -> List[SavingsGoal]:
        return [g for g in self._goals if g.status is not GoalStatus.COMPLETED]

    @property
    def completed_goals(self) -> List[SavingsGoal]:
        return [g for g in self._goals if g.status is GoalStatus.COMPLETED]

    @property
    def total_target(self) -> float:
        return sum(g.target_amount for g in self._goals)

    @property
    def total_saved(self) -> float:
        return sum(g.current_amount for g in self._goals)

    @property
    def overall_progress(self) -> float:
        total = self.total_target
        return (self.total_saved / total * 100) if total > 0 else 0.0

    def to_frame(self) -> pd.DataFrame:
        columns = ['Goal', 'Category', 'Priority', 'Target', 'Saved', 'Remaining',
                   'Progress', 'Status', 'Deadline', 'Months_To_Goal']
        rows = [
            {
                'Goal': g.title,
                'Category': g.category.value,
                'Priority': g.priority.value,
                'Target': g.target_amount,
                'Saved': g.current_amount,
                'Remaining': g.remaining_amount,
                'Progress': g.progress,
                'Status': g.status.value,
                'Deadline': g.deadline,
                'Months_To_Goal': g.months_to_goal,
            }
            for g in self._goals
        ]
        return pd.DataFrame(rows, columns=columns)
