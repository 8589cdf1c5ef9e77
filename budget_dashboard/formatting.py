"""Formatting utilities for amounts, quantities and stock warnings."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from .config import CURRENCY_SYMBOL
from .projection import LOW_STOCK_THRESHOLD_DAYS, round2

STOCK_OK = 'ok'
STOCK_LOW = 'low'
STOCK_UNKNOWN = 'unknown'

Number = Union[float, int]


def format_amount(amount: Optional[Number]) -> str:
    """Format an amount with exactly two decimals, rounding half up.

    Example:
        >>> format_amount(40)
        '40.00'
        >>> format_amount(0.125)
        '0.13'
    """
    if amount is None:
        return '0.00'
    return f"{round2(float(amount)):.2f}"


def format_quantity(quantity: Optional[Number], unit: Optional[str] = None) -> str:
    """Format a quantity to two decimals, optionally followed by its unit."""
    text = format_amount(quantity)
    return f"{text} {unit}" if unit else text


def format_currency(amount: Optional[Number], include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators.

    Args:
        amount: The amount to format
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string (e.g., "$1,234.56", "-$20.00" or "1,234.56")
    """
    value = round2(float(amount or 0.0))
    formatted = f"{abs(value):,.2f}"
    sign = '-' if value < 0 else ''
    symbol = CURRENCY_SYMBOL if include_sign else ''
    return f"{sign}{symbol}{formatted}"


def escape_dollar_for_markdown(text: str) -> str:
    """Escape dollar signs so markdown does not read them as LaTeX delimiters."""
    return text.replace("$", "\\$")


def classify_stock(days_left: Optional[int]) -> str:
    """Classify days of supply into ``'ok'``, ``'low'`` or ``'unknown'``."""
    if days_left is None:
        return STOCK_UNKNOWN
    if days_left <= LOW_STOCK_THRESHOLD_DAYS:
        return STOCK_LOW
    return STOCK_OK


def display_days(days: Optional[int]) -> Optional[int]:
    """Clamp a day count for display; negative counts show as 0."""
    if days is None:
        return None
    return max(0, days)


def unique_labels(labels: Sequence[str]) -> List[str]:
    """Number repeated labels so every entry in a picker is distinct.

    Example:
        >>> unique_labels(['Milk', 'Rice', 'Milk'])
        ['Milk', 'Rice', 'Milk (2)']
    """
    seen: dict = {}
    result = []
    for label in labels:
        seen[label] = seen.get(label, 0) + 1
        result.append(label if seen[label] == 1 else f"{label} ({seen[label]})")
    return result
