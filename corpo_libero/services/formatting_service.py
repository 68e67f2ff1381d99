"""
Helpers de formato numérico y de fechas para la UI (convención es-AR).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any


def _to_decimal(value: Any) -> Decimal | None:
    if value in (None, ""):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None


def format_number(value: Any, decimals: int = 2, use_grouping: bool = True) -> str:
    """Formato es-AR: punto para miles, coma para decimales."""
    number = _to_decimal(value)
    if number is None:
        return "" if value in (None, "") else str(value)

    if decimals < 0:
        decimals = 0
    quant = Decimal("1") if decimals == 0 else Decimal("1").scaleb(-decimals)
    try:
        number = number.quantize(quant)
    except InvalidOperation:
        pass

    format_spec = f",.{decimals}f" if use_grouping else f".{decimals}f"
    formatted = format(number, format_spec)
    return formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def format_currency(value: Any) -> str:
    """Importe en pesos sin decimales, es. 25000 -> "$25.000"."""
    if value in (None, ""):
        return "$0"
    return f"${format_number(value, decimals=0)}"


def format_plain_amount(value: Any) -> str:
    """
    Importe sin separadores ni ceros decimales sobrantes, es.
    Decimal("25000.00") -> "25000", Decimal("99.50") -> "99.5".
    """
    number = _to_decimal(value)
    if number is None:
        return "0"
    if number == number.to_integral_value():
        return str(number.quantize(Decimal("1")))
    return format(number.normalize(), "f")


def format_date(value: Any) -> str:
    """Fecha dd/mm/aaaa."""
    if value in (None, ""):
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    return str(value)
