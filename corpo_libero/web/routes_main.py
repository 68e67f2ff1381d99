"""
Rutas principales: dashboard con estadísticas, alertas e ingresos.
"""

import logging
from datetime import date

from flask import Blueprint, current_app, flash, render_template, request

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import alert_service, reporting_service
from corpo_libero.services.dto import parse_int, parse_month

logger = logging.getLogger(__name__)

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
@main_bp.route("/dashboard")
@login_required
def dashboard():
    today = date.today()
    user_id = current_user_id()

    year, month = parse_month(request.args.get("month"), today)
    revenue_year = parse_int(request.args.get("year")) or today.year
    detail_kind = request.args.get("detail")

    stats = None
    alerts = []
    revenue = []
    detail = None
    try:
        stats = reporting_service.get_dashboard_stats(user_id, year, month, today)
        alerts = alert_service.list_alerts(user_id, today)
        revenue = reporting_service.get_monthly_revenue(user_id, revenue_year)
        if detail_kind:
            detail = reporting_service.get_stat_detail(user_id, detail_kind, year, month, today)
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error cargando el dashboard")
        flash("No se pudieron cargar los datos del dashboard", "danger")

    return render_template(
        "dashboard.html",
        stats=stats,
        alerts=alerts,
        revenue=revenue,
        revenue_year=revenue_year,
        detail=detail,
        selected_month=f"{year:04d}-{month:02d}",
        renewal_share_pct=int(reporting_service.RENEWAL_SHARE_ESTIMATE * 100),
        alert_refresh_seconds=current_app.config.get("ALERT_REFRESH_SECONDS", 300),
        month_labels=reporting_service.MONTH_LABELS,
    )
