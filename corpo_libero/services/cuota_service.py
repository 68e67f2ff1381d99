"""
Servicios para las cuotas mensuales.
"""
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from corpo_libero.models import Cuota
from corpo_libero.services import spreadsheet_service
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

GROUP_CHOICES = ["jardin", "escuela", "competencia"]
METHOD_CHOICES = ["transferencia", "efectivo", "tarjeta"]


def list_cuotas(user_id: int, term: Optional[str] = None) -> List[Cuota]:
    with UnitOfWork() as uow:
        return uow.cuotas.search(user_id, term)


def create_cuota(
    user_id: int,
    alumna: str,
    monto: Optional[Decimal],
    fecha: Optional[date],
    grupo: str = "jardin",
    medio: str = "transferencia",
) -> Cuota:
    """Registra una cuota pagada; vence un mes después de la fecha de pago."""
    alumna = (alumna or "").strip()
    if not alumna or monto is None or fecha is None:
        raise ValueError("Por favor completa todos los campos obligatorios")
    if grupo not in GROUP_CHOICES:
        raise ValueError("Grupo inválido")
    if medio not in METHOD_CHOICES:
        raise ValueError("Medio de pago inválido")

    cuota = Cuota(
        user_id=user_id,
        alumna=alumna,
        grupo=grupo,
        monto=monto,
        medio=medio,
        fecha_pago=fecha,
        vencimiento=fecha + relativedelta(months=1),
        estado="pagado",
    )
    with UnitOfWork() as uow:
        uow.cuotas.add(cuota)
        uow.commit()

    log_structured_event("cuota_created", cuota_id=cuota.id, user_id=user_id, grupo=grupo)
    return cuota


def import_cuotas(user_id: int, content: bytes, filename: str, today: Optional[date] = None) -> int:
    """Importa las filas válidas de la planilla en una sola transacción."""
    rows = spreadsheet_service.parse_cuotas_workbook(content, filename, today)

    with UnitOfWork() as uow:
        uow.cuotas.add_all(
            Cuota(
                user_id=user_id,
                alumna=row.alumna,
                grupo=row.grupo,
                monto=row.monto,
                medio=row.medio,
                fecha_pago=row.fecha_pago,
                vencimiento=row.vencimiento,
                estado=row.estado,
            )
            for row in rows
        )
        uow.commit()

    log_structured_event("cuotas_imported", user_id=user_id, source_file=filename, count=len(rows))
    return len(rows)


def export_cuotas(user_id: int) -> bytes:
    cuotas = list_cuotas(user_id)
    content = spreadsheet_service.build_cuotas_workbook(cuotas)
    log_structured_event("cuotas_exported", user_id=user_id, count=len(cuotas))
    return content
