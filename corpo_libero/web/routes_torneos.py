"""
Rutas de torneos: listado, alta, detalle, participantes y export Excel.
"""

import logging
from io import BytesIO

from flask import Blueprint, abort, flash, redirect, render_template, request, send_file, url_for

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import tournament_service
from corpo_libero.services.cuota_service import METHOD_CHOICES
from corpo_libero.services.dto import parse_date, parse_decimal

logger = logging.getLogger(__name__)

torneos_bp = Blueprint("torneos", __name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@torneos_bp.route("/", methods=["GET"])
@login_required
def list_view():
    tournaments = []
    try:
        tournaments = tournament_service.list_tournaments(current_user_id())
    except Exception:
        logger.exception("Error cargando torneos")
        flash("No se pudieron cargar los torneos", "danger")
    return render_template("torneos/index.html", tournaments=tournaments)


@torneos_bp.route("/", methods=["POST"])
@login_required
def create_view():
    form = request.form
    try:
        tournament = tournament_service.create_tournament(
            current_user_id(),
            name=form.get("name"),
            tournament_date=parse_date(form.get("date")),
            location=form.get("location"),
            categories=tournament_service.parse_categories(form.get("category")),
        )
        flash(f'El torneo "{tournament.name}" ha sido creado exitosamente', "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error creando torneo")
        flash("No se pudo crear el torneo", "danger")
    return redirect(url_for("torneos.list_view"))


@torneos_bp.route("/<int:tournament_id>", methods=["GET"])
@login_required
def detail_view(tournament_id: int):
    tournament = tournament_service.get_tournament(current_user_id(), tournament_id)
    if tournament is None:
        abort(404)
    return render_template(
        "torneos/detail.html",
        tournament=tournament,
        levels=tournament_service.LEVEL_CHOICES,
        methods=METHOD_CHOICES,
        status_labels=tournament_service.PAYMENT_STATUS_LABELS,
    )


def _payment_fields(form):
    return {
        "payment_status": form.get("payment_status") or "pending",
        "payment_date": parse_date(form.get("payment_date")),
        "payment_amount": parse_decimal(form.get("payment_amount")),
        "amount_due": parse_decimal(form.get("amount_due")),
        "payment_method": form.get("payment_method"),
        "observation": form.get("observation"),
    }


@torneos_bp.route("/<int:tournament_id>/participantes", methods=["POST"])
@login_required
def add_participant_view(tournament_id: int):
    form = request.form
    try:
        tournament_service.add_participant(
            current_user_id(),
            tournament_id,
            student_name=form.get("student_name"),
            level=form.get("level"),
            **_payment_fields(form),
        )
        flash("Gimnasta inscripta en el torneo", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error inscribiendo gimnasta en torneo %s", tournament_id)
        flash("No se pudo inscribir a la gimnasta", "danger")
    return redirect(url_for("torneos.detail_view", tournament_id=tournament_id))


@torneos_bp.route("/<int:tournament_id>/participantes/<int:participant_id>", methods=["POST"])
@login_required
def update_participant_view(tournament_id: int, participant_id: int):
    tournament = tournament_service.get_tournament(current_user_id(), tournament_id)
    if tournament is None or participant_id not in {p.id for p in tournament.participants}:
        abort(404)
    try:
        tournament_service.update_participant_payment(
            current_user_id(), participant_id, **_payment_fields(request.form)
        )
        flash("Pago actualizado", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error actualizando participante %s", participant_id)
        flash("No se pudo actualizar el pago", "danger")
    return redirect(url_for("torneos.detail_view", tournament_id=tournament_id))


@torneos_bp.route("/<int:tournament_id>/export", methods=["GET"])
@login_required
def export_view(tournament_id: int):
    try:
        content, filename = tournament_service.export_tournament(current_user_id(), tournament_id)
    except ValueError:
        abort(404)
    except Exception:
        logger.exception("Error exportando torneo %s", tournament_id)
        flash("No se pudo generar el archivo Excel", "danger")
        return redirect(url_for("torneos.detail_view", tournament_id=tournament_id))
    return send_file(BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)


@torneos_bp.route("/export", methods=["GET"])
@login_required
def export_all_view():
    try:
        content, filename = tournament_service.export_all_tournaments(current_user_id())
    except ValueError as exc:
        flash(str(exc), "warning")
        return redirect(url_for("torneos.list_view"))
    except Exception:
        logger.exception("Error exportando historial de torneos")
        flash("No se pudo generar el archivo Excel", "danger")
        return redirect(url_for("torneos.list_view"))
    return send_file(BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)
