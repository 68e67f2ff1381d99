"""
Rutas de inscripciones: alta de alumnas y gestión de la inscripción anual.
"""

import logging

from flask import Blueprint, flash, redirect, render_template, request, url_for

from corpo_libero.middleware.auth import current_user_id, login_required
from corpo_libero.services import registration_service, student_service
from corpo_libero.services.dto import AnnualRegistrationData, RegistrationFormData

logger = logging.getLogger(__name__)

inscripciones_bp = Blueprint("inscripciones", __name__)


@inscripciones_bp.route("/", methods=["GET"])
@login_required
def list_view():
    students = []
    try:
        students = registration_service.list_registrations(current_user_id())
    except Exception:
        logger.exception("Error cargando inscripciones")
        flash("No se pudieron cargar las inscripciones", "danger")

    return render_template(
        "inscripciones/index.html",
        students=students,
        levels=student_service.LEVEL_CHOICES,
    )


@inscripciones_bp.route("/", methods=["POST"])
@login_required
def create_view():
    data = RegistrationFormData.from_form(request.form)
    try:
        student = registration_service.register_student(
            current_user_id(),
            data,
            certificate=request.files.get("medical_certificate_file"),
            photo=request.files.get("photo"),
        )
        flash(f"{student.full_name} fue inscripta correctamente", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error registrando alumna")
        flash("Hubo un problema al registrar la inscripción", "danger")
    return redirect(url_for("inscripciones.list_view"))


@inscripciones_bp.route("/anual", methods=["POST"])
@login_required
def annual_view():
    data = AnnualRegistrationData.from_form(request.form)
    mode = request.form.get("mode", "renewal")
    try:
        if mode == "new":
            registration_service.create_annual_registration(current_user_id(), data)
            flash("Inscripción anual registrada con éxito", "success")
        else:
            registration_service.renew_annual_registration(current_user_id(), data)
            flash("Renovación registrada con éxito", "success")
    except ValueError as exc:
        flash(str(exc), "warning")
    except Exception:
        logger.exception("Error en la gestión anual")
        flash("Hubo un problema al guardar la inscripción anual", "danger")
    return redirect(url_for("inscripciones.list_view"))
