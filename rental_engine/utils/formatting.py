"""Chilean-locale number and currency formatting for rendered figures."""

from __future__ import annotations

from typing import Literal, Union

from .coerce import finite_or

Currency = Literal["CLP", "UF"]


def _swap_separators(text: str) -> str:
    # en-US grouping "1,234.56" -> es-CL "1.234,56"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_number(value: Union[int, float, str, None]) -> str:
    """Group the integer digits of ``value`` with dots; empty input gives ''."""

    if value is None or value == "":
        return ""
    if isinstance(value, str):
        digits = "".join(ch for ch in value if ch.isdigit())
    else:
        digits = str(int(abs(finite_or(value))))
    if not digits:
        return ""
    return _swap_separators(f"{int(digits):,}")


def format_currency(amount: float, currency: Currency = "CLP") -> str:
    """Render CLP as ``$1.234.567`` and UF as ``1.234,50 UF``; non-finite amounts render as zero."""

    amount = finite_or(amount)
    if currency == "UF":
        return f"{_swap_separators(f'{amount:,.2f}')} UF"
    sign = "-" if amount < 0 else ""
    return f"{sign}${format_number(round(abs(amount)))}"


def format_percentage(value: float, precision: int = 2) -> str:
    return f"{_swap_separators(f'{finite_or(value):.{precision}f}')}%"


__all__ = ["format_number", "format_currency", "format_percentage"]
