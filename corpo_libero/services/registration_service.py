"""
Servicios de inscripción: alta de alumnas nuevas y gestión de la
inscripción anual a la federación (renovación o inscripción nueva).
"""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from werkzeug.datastructures import FileStorage

from corpo_libero.models import Pase, Student
from corpo_libero.services import storage_service
from corpo_libero.services.dto import AnnualRegistrationData, RegistrationFormData
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


def list_registrations(user_id: int) -> List[Student]:
    """Alumnas inscriptas, más recientes primero."""
    with UnitOfWork() as uow:
        return uow.students.list_for_user(user_id)


def register_student(
    user_id: int,
    data: RegistrationFormData,
    certificate: Optional[FileStorage] = None,
    photo: Optional[FileStorage] = None,
) -> Student:
    if not data.full_name or not data.birth_date or not data.dni:
        raise ValueError("Por favor completa los campos obligatorios: nombre, fecha de nacimiento y DNI")

    certificate_url = storage_service.upload_medical_certificate(certificate, user_id)
    photo_url = storage_service.upload_student_photo(photo, user_id)

    student = Student(
        user_id=user_id,
        full_name=data.full_name,
        birth_date=data.birth_date,
        dni=data.dni,
        address=data.address or None,
        phone=data.phone or None,
        email=data.email or None,
        school=data.school or data.contact_name or None,
        photo=photo_url,
        medical_certificate_status="active" if data.medical_certificate_date else "pending",
        medical_certificate_expiry_date=data.medical_certificate_date,
        medical_certificate_file=certificate_url,
        federation_status="active" if data.payment_date else "inactive",
        federation_payment_date=data.payment_date,
        federation_amount=data.amount,
        federation_payment_method=data.payment_method or None,
    )

    with UnitOfWork() as uow:
        uow.students.add(student)
        uow.commit()

    log_structured_event(
        "student_registered",
        student_id=student.id,
        user_id=user_id,
        has_certificate=bool(certificate_url),
        has_photo=bool(photo_url),
    )
    return student


def _validate_payment(data: AnnualRegistrationData) -> None:
    if not data.approved:
        raise ValueError("Debes confirmar la aprobación de la inscripción")
    if data.amount is None or data.amount <= 0 or not data.date or not data.payment_method:
        raise ValueError("Por favor completa monto, fecha y medio de pago")


def renew_annual_registration(user_id: int, data: AnnualRegistrationData) -> Pase:
    """Renovación de una alumna existente: crea el pase y activa la federación."""
    if not data.student_id:
        raise ValueError("Selecciona una alumna para renovar")
    _validate_payment(data)

    with UnitOfWork() as uow:
        student = uow.students.get_for_user(data.student_id, user_id)
        if student is None:
            raise ValueError("Alumna no encontrada")

        pase = Pase(
            user_id=user_id,
            student_id=student.id,
            student_name=student.full_name,
            fecha=data.date,
            monto=data.amount,
            medio=data.payment_method,
            year=date.today().year,
        )
        uow.pases.add(pase)

        student.federation_status = "active"
        student.federation_payment_date = data.date
        student.federation_amount = data.amount
        student.federation_payment_method = data.payment_method

        uow.commit()

    log_structured_event("annual_registration_renewed", student_id=data.student_id, pase_id=pase.id)
    return pase


def create_annual_registration(user_id: int, data: AnnualRegistrationData) -> Pase:
    """Inscripción anual nueva: crea la alumna (federación activa) y su pase."""
    if not data.full_name:
        raise ValueError("El nombre completo es obligatorio")
    _validate_payment(data)

    with UnitOfWork() as uow:
        student = Student(
            user_id=user_id,
            full_name=data.full_name,
            school=data.school or None,
            level=data.level or None,
            medical_certificate_status="pending",
            federation_status="active",
            federation_payment_date=data.date,
            federation_amount=data.amount,
            federation_payment_method=data.payment_method,
        )
        uow.students.add(student)
        uow.session.flush()

        pase = Pase(
            user_id=user_id,
            student_id=student.id,
            student_name=student.full_name,
            fecha=data.date,
            monto=data.amount,
            medio=data.payment_method,
            year=date.today().year,
        )
        uow.pases.add(pase)
        uow.commit()

    log_structured_event("annual_registration_created", student_id=student.id, pase_id=pase.id)
    return pase
