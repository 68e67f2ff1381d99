"""
Rutas de pases.
"""

import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import pase_service
from corpo_libero.services.cuota_service import METHOD_CHOICES
from corpo_libero.services.dto import parse_date, parse_decimal, parse_int

logger = logging.getLogger(__name__)

pases_bp = Blueprint("pases", __name__)


@pases_bp.route("/", methods=["GET"])
@login_required
def list_view():
    pases = []
    try:
        pases = pase_service.list_pases(current_user_id())
    except Exception:
        logger.exception("Error cargando pases")
        flash("No se pudieron cargar los pases", "danger")
    return render_template("pases/index.html", pases=pases, methods=METHOD_CHOICES)


@pases_bp.route("/", methods=["POST"])
@login_required
def create_view():
    form = request.form
    try:
        pase_service.create_pase(
            current_user_id(),
            student_name=form.get("student_name"),
            gimnasio_traspaso=form.get("gimnasio_traspaso"),
            fecha=parse_date(form.get("fecha")),
            monto=parse_decimal(form.get("monto")),
            medio=form.get("medio"),
            student_id=parse_int(form.get("student_id")),
        )
        flash("Pase creado con éxito", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error guardando pase")
        flash("Hubo un problema al guardar el pase", "danger")
    return redirect(url_for("pases.list_view"))
