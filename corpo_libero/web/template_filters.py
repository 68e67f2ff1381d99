"""
Registro de filtros Jinja para la UI.
"""

from __future__ import annotations

from flask import Flask

from corpo_libero.services.formatting_service import (
    format_currency,
    format_date,
)


def register_template_filters(app: Flask) -> None:
    app.add_template_filter(format_currency, "format_currency")
    app.add_template_filter(format_date, "format_date")
