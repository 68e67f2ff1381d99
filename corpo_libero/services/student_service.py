"""
Servicios para la gestión de alumnas (ficha, búsqueda, historial de pagos).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from werkzeug.datastructures import FileStorage

from corpo_libero.models import PaymentRecord, Student
from corpo_libero.services import storage_service
from corpo_libero.services.dto import StudentFormData
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

LEVEL_CHOICES = ["inicial", "intermedio", "avanzado", "competencia"]
CERTIFICATE_STATUS_CHOICES = ["active", "expired", "pending"]
FEDERATION_STATUS_CHOICES = ["active", "inactive", "pending"]

AUTOCOMPLETE_LIMIT = 10


@dataclass
class PaymentHistory:
    records: List[PaymentRecord] = field(default_factory=list)
    paid_count: int = 0
    pending_count: int = 0
    paid_total: Decimal = Decimal("0")


def get_student(user_id: int, student_id: int) -> Optional[Student]:
    with UnitOfWork() as uow:
        return uow.students.get_for_user(student_id, user_id)


def get_default_student(user_id: int, student_id: Optional[int] = None) -> Optional[Student]:
    """La alumna pedida o, si no se indica, la primera por nombre."""
    with UnitOfWork() as uow:
        if student_id:
            student = uow.students.get_for_user(student_id, user_id)
            if student is not None:
                return student
        students = uow.students.search_by_name(user_id, "", limit=1)
        return students[0] if students else None


def search_students(user_id: int, term: str, limit: int = AUTOCOMPLETE_LIMIT) -> List[Student]:
    term = (term or "").strip()
    if not term:
        return []
    with UnitOfWork() as uow:
        return uow.students.search_by_name(user_id, term, limit=limit)


def _validate(data: StudentFormData) -> None:
    if not data.full_name:
        raise ValueError("El nombre completo es obligatorio")
    if data.medical_certificate_status not in CERTIFICATE_STATUS_CHOICES:
        raise ValueError("Estado de certificado médico inválido")
    if data.federation_status not in FEDERATION_STATUS_CHOICES:
        raise ValueError("Estado de federación inválido")


def create_student(
    user_id: int,
    data: StudentFormData,
    photo: Optional[FileStorage] = None,
    certificate: Optional[FileStorage] = None,
) -> Student:
    _validate(data)

    student = Student(user_id=user_id, **data.to_columns())
    student.photo = storage_service.upload_student_photo(photo, user_id)
    student.medical_certificate_file = storage_service.upload_medical_certificate(certificate, user_id)

    with UnitOfWork() as uow:
        uow.students.add(student)
        uow.commit()

    log_structured_event("student_created", student_id=student.id, user_id=user_id)
    return student


def update_student(
    user_id: int,
    student_id: int,
    data: StudentFormData,
    photo: Optional[FileStorage] = None,
    certificate: Optional[FileStorage] = None,
) -> Student:
    _validate(data)

    with UnitOfWork() as uow:
        student = uow.students.get_for_user(student_id, user_id)
        if student is None:
            raise ValueError("Alumna no encontrada")

        for column, value in data.to_columns().items():
            setattr(student, column, value)

        # Un archivo nuevo reemplaza al anterior; sin archivo se conserva
        photo_url = storage_service.upload_student_photo(photo, user_id)
        if photo_url:
            student.photo = photo_url
        certificate_url = storage_service.upload_medical_certificate(certificate, user_id)
        if certificate_url:
            student.medical_certificate_file = certificate_url

        uow.commit()

    log_structured_event("student_updated", student_id=student_id, user_id=user_id)
    return student


def get_payment_history(user_id: int, student_id: int) -> PaymentHistory:
    with UnitOfWork() as uow:
        records = uow.payment_records.list_by_student(user_id, student_id)

    history = PaymentHistory(records=records)
    for record in records:
        if record.status == "paid":
            history.paid_count += 1
            history.paid_total += Decimal(record.amount or 0)
        elif record.status in ("pending", "overdue"):
            history.pending_count += 1
    return history
