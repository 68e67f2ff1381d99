"""
Servicios para los pases (traspasos y pagos de inscripción anual).
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from corpo_libero.models import Pase
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork


def list_pases(user_id: int) -> List[Pase]:
    with UnitOfWork() as uow:
        return uow.pases.list_for_user(user_id)


def create_pase(
    user_id: int,
    student_name: str,
    gimnasio_traspaso: str,
    fecha: Optional[date],
    monto: Optional[Decimal],
    medio: str,
    student_id: Optional[int] = None,
) -> Pase:
    student_name = (student_name or "").strip()
    gimnasio_traspaso = (gimnasio_traspaso or "").strip()
    medio = (medio or "").strip()
    if not student_name or not gimnasio_traspaso or fecha is None or monto is None or not medio:
        raise ValueError("Por favor completa todos los campos")

    with UnitOfWork() as uow:
        student = None
        if student_id:
            student = uow.students.get_for_user(student_id, user_id)
        if student is None:
            student = uow.students.get_by_full_name(user_id, student_name)

        pase = Pase(
            user_id=user_id,
            student_id=student.id if student else None,
            student_name=student.full_name if student else student_name,
            gimnasio_traspaso=gimnasio_traspaso,
            fecha=fecha,
            monto=monto,
            medio=medio,
            year=fecha.year,
        )
        uow.pases.add(pase)
        uow.commit()

    log_structured_event("pase_created", pase_id=pase.id, user_id=user_id)
    return pase
