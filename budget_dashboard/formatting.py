"""Formatting utilities for currency, percent and date display."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Union

import pandas as pd

from .errors import ValidationError

MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

_CURRENCY_PATTERN = re.compile(r'^(-)?\$?(\d{1,3}(?:,\d{3})*|\d+)(?:\.(\d{1,2}))?$')


def format_currency(amount: Union[float, int]) -> str:
    """Format a dollar amount with separators and two decimals.

    Args:
        amount: The amount to format

    Returns:
        Formatted currency string, sign in front of the dollar symbol

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-50)
        '-$50.00'
    """
    formatted = f"{abs(amount):,.2f}"
    if amount < 0 and formatted != "0.00":
        return f"-${formatted}"
    return f"${formatted}"


def escape_markdown(text: str) -> str:
    """Escape dollar signs so Streamlit markdown does not start LaTeX math."""
    return text.replace("$", "\\$")


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX math delimiter, which turns
    the text between two amounts into italics.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\$1,234.56'
    """
    return escape_markdown(format_currency(amount))


def format_percent(value: Union[float, int]) -> str:
    """Render a value already scaled to 0-100 with one decimal place."""
    return f"{value:,.1f}%"


def format_date(value: Union[date, datetime, str, pd.Timestamp]) -> str:
    """Render a date as ``Mon D, YYYY`` (e.g. ``Aug 15, 2024``)."""
    if isinstance(value, str):
        value = pd.to_datetime(value)
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year}"


def parse_currency(text: str) -> float:
    """Parse a string produced by :func:`format_currency` back to a float.

    Accounting-style parentheses are accepted as a negative sign.

    Raises:
        ValidationError: If the text is not a currency amount.
    """
    cleaned = text.strip()
    if cleaned.startswith('(') and cleaned.endswith(')'):
        cleaned = '-' + cleaned[1:-1].strip()
    match = _CURRENCY_PATTERN.match(cleaned)
    if match is None:
        raise ValidationError(f"Not a currency amount: {text!r}", field='amount')
    sign, whole, cents = match.groups()
    amount = float(f"{whole.replace(',', '')}.{(cents or '0').ljust(2, '0')}")
    return -amount if sign else amount
