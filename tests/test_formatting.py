from datetime import date, datetime
from decimal import Decimal

from corpo_libero.services.dto import parse_bool, parse_date, parse_decimal, parse_month
from corpo_libero.services.formatting_service import (
    format_currency,
    format_date,
    format_number,
    format_plain_amount,
)


def test_format_plain_amount():
    assert format_plain_amount(Decimal("25000.00")) == "25000"
    assert format_plain_amount(Decimal("99.50")) == "99.5"
    assert format_plain_amount(None) == "0"


def test_format_number_es_ar():
    assert format_number(Decimal("1234567.891")) == "1.234.567,89"
    assert format_currency(Decimal("25000")) == "$25.000"
    assert format_currency(None) == "$0"


def test_format_date():
    assert format_date(date(2026, 1, 5)) == "05/01/2026"
    assert format_date(datetime(2026, 1, 5, 10, 30)) == "05/01/2026"
    assert format_date(None) == ""


def test_form_parsers():
    assert parse_date("2026-01-05") == date(2026, 1, 5)
    assert parse_date("05/01/2026") == date(2026, 1, 5)
    assert parse_date("ayer") is None
    assert parse_decimal("1500,50") == Decimal("1500.50")
    assert parse_decimal("abc") is None
    assert parse_decimal("NaN") is None
    assert parse_decimal("Infinity") is None
    assert parse_bool("on") is True
    assert parse_bool(None) is False
    assert parse_month("2026-03", date(2025, 1, 1)) == (2026, 3)
    assert parse_month("marzo", date(2025, 1, 1)) == (2025, 1)
