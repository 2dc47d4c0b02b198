"""Value formatting for ticks, labels and tooltips."""

from __future__ import annotations


def format_number(value: float) -> str:
    """``1500.0 -> "1,500"``, ``2.5 -> "2.5"``."""
    value = float(value)
    if value.is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def format_currency(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return f"${int(value):,}"
    return f"${value:,.2f}"
