"""Parsing tolerante de campos de formulario y query string."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

_TRUE_VALUES = {"1", "true", "yes", "on", "si", "sí"}


def parse_date(value: Any) -> Optional[date]:
    """Acepta aaaa-mm-dd (input date HTML) o dd/mm/aaaa."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    try:
        result = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, AttributeError):
        return None
    # NaN e Infinity no son montos
    if not result.is_finite():
        return None
    return result


def parse_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def parse_month(value: Any, default: date) -> Tuple[int, int]:
    """"aaaa-mm" -> (año, mes); si no es válido usa el mes de `default`."""
    if value:
        try:
            parsed = datetime.strptime(str(value).strip(), "%Y-%m")
            return parsed.year, parsed.month
        except ValueError:
            pass
    return default.year, default.month
