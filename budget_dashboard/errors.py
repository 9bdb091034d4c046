"""Exceptions raised by the budget and goal ledgers."""

from __future__ import annotations

from typing import Optional


class BudgetDashboardError(Exception):
    """Base class for dashboard errors."""


class ValidationError(BudgetDashboardError, ValueError):
    """A mutation request was rejected because an input is invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class RecordNotFoundError(BudgetDashboardError, KeyError):
    """No budget category or goal exists with the requested id."""

    def __init__(self, record_id: str, kind: str = "record"):
        super().__init__(record_id)
        self.record_id = record_id
        self.kind = kind

    def __str__(self) -> str:
        return f"No {self.kind} with id {self.record_id!r}"
