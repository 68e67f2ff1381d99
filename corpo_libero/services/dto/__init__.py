"""DTO y helpers de parsing para los formularios."""

from .form_fields import parse_bool, parse_date, parse_decimal, parse_int, parse_month
from .student_forms import (
    AnnualRegistrationData,
    RegistrationFormData,
    StudentFormData,
)

__all__ = [
    "parse_bool",
    "parse_date",
    "parse_decimal",
    "parse_int",
    "parse_month",
    "AnnualRegistrationData",
    "RegistrationFormData",
    "StudentFormData",
]
