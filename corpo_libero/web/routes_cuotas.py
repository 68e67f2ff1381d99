"""
Rutas de cuotas: listado con búsqueda, alta, export e import Excel.
"""

import logging
from datetime import date
from io import BytesIO

from flask import Blueprint, flash, redirect, render_template, request, send_file, url_for

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import cuota_service, reporting_service, spreadsheet_service
from corpo_libero.services.dto import parse_date, parse_decimal

logger = logging.getLogger(__name__)

cuotas_bp = Blueprint("cuotas", __name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@cuotas_bp.route("/", methods=["GET"])
@login_required
def list_view():
    term = (request.args.get("q") or "").strip()
    cuotas = []
    revenue_by_group = []
    try:
        cuotas = cuota_service.list_cuotas(current_user_id(), term or None)
        revenue_by_group = reporting_service.get_revenue_by_group(current_user_id())
    except Exception:
        logger.exception("Error cargando cuotas")
        flash("No se pudieron cargar las cuotas", "danger")

    return render_template(
        "cuotas/index.html",
        cuotas=cuotas,
        term=term,
        revenue_by_group=revenue_by_group,
        groups=cuota_service.GROUP_CHOICES,
        methods=cuota_service.METHOD_CHOICES,
    )


@cuotas_bp.route("/", methods=["POST"])
@login_required
def create_view():
    form = request.form
    try:
        cuota_service.create_cuota(
            current_user_id(),
            alumna=form.get("alumna"),
            monto=parse_decimal(form.get("monto")),
            fecha=parse_date(form.get("fecha")),
            grupo=form.get("grupo") or "jardin",
            medio=form.get("medio") or "transferencia",
        )
        flash("La cuota se ha cargado con éxito", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error guardando cuota")
        flash("Hubo un problema al guardar la cuota", "danger")
    return redirect(url_for("cuotas.list_view"))


@cuotas_bp.route("/export", methods=["GET"])
@login_required
def export_view():
    try:
        content = cuota_service.export_cuotas(current_user_id())
    except ValueError as exc:
        flash(str(exc), "warning")
        return redirect(url_for("cuotas.list_view"))
    except Exception:
        logger.exception("Error exportando cuotas")
        flash("No se pudo generar el archivo Excel", "danger")
        return redirect(url_for("cuotas.list_view"))

    return send_file(
        BytesIO(content),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=spreadsheet_service.cuotas_export_filename(date.today()),
    )


@cuotas_bp.route("/import", methods=["POST"])
@login_required
def import_view():
    file = request.files.get("file")
    if not file or not file.filename:
        flash("Selecciona un archivo Excel", "warning")
        return redirect(url_for("cuotas.list_view"))

    try:
        count = cuota_service.import_cuotas(current_user_id(), file.read(), file.filename)
        flash(f"Se importaron {count} cuotas correctamente", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error importando cuotas")
        flash("Error al procesar el archivo Excel", "danger")
    return redirect(url_for("cuotas.list_view"))
