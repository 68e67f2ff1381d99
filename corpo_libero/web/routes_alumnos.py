"""
Rutas de alumnas: ficha, alta/edición e historial de pagos.
"""

import logging

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import student_service
from corpo_libero.services.dto import StudentFormData, parse_int

logger = logging.getLogger(__name__)

alumnos_bp = Blueprint("alumnos", __name__)


@alumnos_bp.route("/", methods=["GET"])
@login_required
def profile_view():
    user_id = current_user_id()
    student = None
    history = None
    try:
        student = student_service.get_default_student(user_id, parse_int(request.args.get("id")))
        if student is not None:
            history = student_service.get_payment_history(user_id, student.id)
    except Exception:
        logger.exception("Error cargando alumna")
        flash("No se pudieron cargar los datos de la alumna", "danger")

    return render_template(
        "alumnos/index.html",
        student=student,
        history=history,
        levels=student_service.LEVEL_CHOICES,
        certificate_statuses=student_service.CERTIFICATE_STATUS_CHOICES,
        federation_statuses=student_service.FEDERATION_STATUS_CHOICES,
    )


@alumnos_bp.route("/", methods=["POST"])
@login_required
def create_view():
    data = StudentFormData.from_form(request.form)
    try:
        student = student_service.create_student(
            current_user_id(),
            data,
            photo=request.files.get("photo"),
            certificate=request.files.get("medical_certificate_file"),
        )
        flash("Alumna creada con éxito", "success")
        return redirect(url_for("alumnos.profile_view", id=student.id))
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error creando alumna")
        flash("Hubo un problema al guardar la alumna", "danger")
    return redirect(url_for("alumnos.profile_view"))


@alumnos_bp.route("/<int:student_id>", methods=["POST"])
@login_required
def update_view(student_id: int):
    if student_service.get_student(current_user_id(), student_id) is None:
        abort(404)

    data = StudentFormData.from_form(request.form)
    try:
        student_service.update_student(
            current_user_id(),
            student_id,
            data,
            photo=request.files.get("photo"),
            certificate=request.files.get("medical_certificate_file"),
        )
        flash("Datos actualizados", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error actualizando alumna %s", student_id)
        flash("Hubo un problema al guardar la alumna", "danger")
    return redirect(url_for("alumnos.profile_view", id=student_id))
