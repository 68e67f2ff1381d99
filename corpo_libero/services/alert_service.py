"""
Servicio de alertas del dashboard.

Las alertas se derivan en cada consulta de cuatro fuentes (cuotas,
certificados médicos, torneos, merchandising) y no se guardan.
La única escritura es la marca `alerta_enviada` de los pedidos de
merchandising.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from corpo_libero.models import Cuota, MerchandisingOrder, Student, TournamentParticipant
from corpo_libero.services import settings_service
from corpo_libero.services.formatting_service import format_plain_amount
from corpo_libero.services.logging import log_structured_event
from corpo_libero.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SOURCE_CUOTA = "cuota"
SOURCE_CERTIFICATE = "certificado"
SOURCE_TOURNAMENT = "torneo"
SOURCE_MERCHANDISING = "merchandising"

DEFAULT_WARNING_DAYS = 30
DEFAULT_URGENT_DAYS = 7


@dataclass
class Alert:
    id: str
    type: str  # payment, certificate, tournament, merchandise
    title: str
    description: str
    student_name: str
    due_date: Optional[date]
    amount: Optional[str]
    urgent: bool
    source: str
    source_id: int
    checked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["due_date"] = self.due_date.isoformat() if self.due_date else None
        return data


def _amount_label(value) -> str:
    return f"${format_plain_amount(value)}"


def alerts_for_overdue_cuotas(cuotas: Iterable[Cuota], today: date) -> List[Alert]:
    alerts: List[Alert] = []
    for cuota in cuotas:
        if cuota.estado == "pagado":
            continue
        if cuota.vencimiento is None or cuota.vencimiento >= today:
            continue
        alerts.append(
            Alert(
                id=f"{SOURCE_CUOTA}-{cuota.id}",
                type="payment",
                title="Cuota Vencida",
                description=f"Cuota del grupo {cuota.grupo}",
                student_name=cuota.alumna,
                due_date=cuota.vencimiento,
                amount=_amount_label(cuota.monto),
                urgent=True,
                source=SOURCE_CUOTA,
                source_id=cuota.id,
            )
        )
    return alerts


def alerts_for_certificates(
    students: Iterable[Student],
    today: date,
    warning_days: int = DEFAULT_WARNING_DAYS,
    urgent_days: int = DEFAULT_URGENT_DAYS,
) -> List[Alert]:
    limit = today + timedelta(days=warning_days)
    alerts: List[Alert] = []
    for student in students:
        expiry = student.medical_certificate_expiry_date
        if expiry is None or expiry >= limit:
            continue

        days_until_expiry = (expiry - today).days
        expired = expiry < today
        if expired:
            title = "Certificado Médico Vencido"
            description = "Certificado vencido"
        else:
            title = "Certificado Médico por Vencer"
            description = f"Vence en {days_until_expiry} días"

        alerts.append(
            Alert(
                id=f"{SOURCE_CERTIFICATE}-{student.id}",
                type="certificate",
                title=title,
                description=description,
                student_name=student.full_name,
                due_date=expiry,
                amount=None,
                urgent=expired or days_until_expiry <= urgent_days,
                source=SOURCE_CERTIFICATE,
                source_id=student.id,
            )
        )
    return alerts


def alerts_for_partial_tournament_payments(
    participants: Iterable[TournamentParticipant], today: date
) -> List[Alert]:
    """
    Participantes con pago parcial y saldo pendiente.

    Sin arancel cargado (`amount_due`) no hay saldo calculable y no se alerta.
    """
    alerts: List[Alert] = []
    for participant in participants:
        if participant.payment_status != "partial":
            continue
        remaining = participant.remaining_amount
        if remaining is None or remaining <= Decimal("0"):
            continue

        tournament_name = participant.tournament.name if participant.tournament else "Torneo"
        due_date = participant.due_date
        alerts.append(
            Alert(
                id=f"{SOURCE_TOURNAMENT}-{participant.id}",
                type="tournament",
                title="Pago Parcial - Torneo",
                description=f"{tournament_name} - Falta abonar",
                student_name=participant.student_name,
                due_date=due_date,
                amount=_amount_label(remaining),
                urgent=bool(due_date and due_date < today),
                source=SOURCE_TOURNAMENT,
                source_id=participant.id,
            )
        )
    return alerts


def alerts_for_merchandising(orders: Iterable[MerchandisingOrder]) -> List[Alert]:
    alerts: List[Alert] = []
    for order in orders:
        if order.pago_completo:
            continue
        alerts.append(
            Alert(
                id=f"{SOURCE_MERCHANDISING}-{order.id}",
                type="merchandise",
                title="Pago Parcial - Merchandising",
                description=f"{order.producto} - Pago pendiente",
                student_name=order.alumna,
                due_date=order.fecha,
                amount=_amount_label(order.monto),
                urgent=False,
                source=SOURCE_MERCHANDISING,
                source_id=order.id,
                checked=bool(order.alerta_enviada),
            )
        )
    return alerts


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
    """Urgentes primero; luego por vencimiento ascendente, sin fecha al final."""
    return sorted(
        alerts,
        key=lambda alert: (
            0 if alert.urgent else 1,
            alert.due_date is None,
            alert.due_date or date.max,
        ),
    )


def derive_alerts(
    *,
    cuotas: Iterable[Cuota],
    students: Iterable[Student],
    participants: Iterable[TournamentParticipant],
    orders: Iterable[MerchandisingOrder],
    today: date,
    warning_days: int = DEFAULT_WARNING_DAYS,
    urgent_days: int = DEFAULT_URGENT_DAYS,
) -> List[Alert]:
    alerts: List[Alert] = []
    alerts.extend(alerts_for_overdue_cuotas(cuotas, today))
    alerts.extend(alerts_for_certificates(students, today, warning_days, urgent_days))
    alerts.extend(alerts_for_partial_tournament_payments(participants, today))
    alerts.extend(alerts_for_merchandising(orders))
    return sort_alerts(alerts)


def list_alerts(user_id: int, today: Optional[date] = None) -> List[Alert]:
    """Alertas ordenadas del usuario a la fecha `today` (hoy por defecto)."""
    today = today or date.today()
    warning_days = settings_service.get_int_setting("CERTIFICATE_WARNING_DAYS", DEFAULT_WARNING_DAYS)
    urgent_days = settings_service.get_int_setting("CERTIFICATE_URGENT_DAYS", DEFAULT_URGENT_DAYS)

    with UnitOfWork() as uow:
        cuotas = uow.cuotas.list_overdue(user_id, today)
        students = uow.students.list_certificates_expiring_before(
            user_id, today + timedelta(days=warning_days)
        )
        participants = uow.participants.list_partial(user_id)
        orders = uow.merchandising.list_unpaid(user_id)

        alerts = derive_alerts(
            cuotas=cuotas,
            students=students,
            participants=participants,
            orders=orders,
            today=today,
            warning_days=warning_days,
            urgent_days=urgent_days,
        )

    logger.debug("Alertas derivadas", extra={"user_id": user_id, "count": len(alerts)})
    return alerts


def mark_alert_checked(user_id: int, source: str, source_id: int) -> bool:
    """
    Marca una alerta como revisada.

    Solo las alertas de merchandising tienen estado persistente; para el
    resto devuelve False sin tocar la base.
    """
    if source != SOURCE_MERCHANDISING:
        return False

    with UnitOfWork() as uow:
        order = uow.merchandising.get_for_user(source_id, user_id)
        if order is None:
            raise ValueError("Pedido no encontrado")
        order.alerta_enviada = True
        uow.commit()

    log_structured_event(
        "alert_checked",
        source=source,
        source_id=source_id,
        user_id=user_id,
    )
    return True
