"""
API JSON del dashboard.

Endpoints:

GET  /api/dashboard/alerts
    Lista ordenada de alertas derivadas (polling cada ALERT_REFRESH_SECONDS).

POST /api/dashboard/alerts/check
    Marca una alerta como revisada. Solo persiste en merchandising.
"""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify, request

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import alert_service

logger = logging.getLogger(__name__)

api_dashboard_bp = Blueprint("api_dashboard", __name__)


@api_dashboard_bp.route("/alerts", methods=["GET"])
@login_required
def api_list_alerts():
    """
    Output:
    {
      "success": true,
      "message": "",
      "payload": [{"id": "cuota-1", "type": "payment", "urgent": true, ...}, ...]
    }
    """
    try:
        alerts = alert_service.list_alerts(current_user_id())
    except Exception:
        logger.exception("Error cargando alertas")
        return jsonify(
            {"success": False, "message": "No se pudieron cargar las alertas", "payload": None}
        ), 500

    return jsonify(
        {
            "success": True,
            "message": "",
            "payload": [alert.to_dict() for alert in alerts],
        }
    )


@api_dashboard_bp.route("/alerts/check", methods=["POST"])
@login_required
def api_check_alert():
    """
    Body JSON esperado:
    {
      "source": "merchandising",
      "source_id": 12
    }
    """
    data = request.get_json(silent=True) or {}
    source = data.get("source")
    source_id = data.get("source_id")

    try:
        source_id = int(source_id)
    except (TypeError, ValueError):
        return jsonify(
            {"success": False, "message": "source_id inválido", "payload": None}
        ), 400

    try:
        persisted = alert_service.mark_alert_checked(current_user_id(), source, source_id)
    except ValueError as exc:
        return jsonify({"success": False, "message": str(exc), "payload": None}), 404

    return jsonify(
        {
            "success": True,
            "message": "Alerta marcada como revisada" if persisted else "",
            "payload": {"persisted": persisted},
        }
    )
