"""
Servicios de reportes: ingresos mensuales, tarjetas de estadísticas
del dashboard y detalle de cada tarjeta.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from corpo_libero.services.unit_of_work import UnitOfWork

MONTH_LABELS = [
    "Ene", "Feb", "Mar", "Abr", "May", "Jun",
    "Jul", "Ago", "Sep", "Oct", "Nov", "Dic",
]

# Estimación: los pases no distinguen renovación de inscripción nueva.
# Se atribuye el 30% a renovaciones y el resto a inscripciones.
RENEWAL_SHARE_ESTIMATE = Decimal("0.3")

STAT_KINDS = ("cuotas-al-dia", "cuotas-vencidas", "certificados-vencidos", "ingresos")

_CENT = Decimal("0.01")


@dataclass
class RevenueBreakdown:
    label: str
    cuotas: Decimal = Decimal("0")
    inscripciones: Decimal = Decimal("0")
    renovaciones: Decimal = Decimal("0")
    merchandising: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "cuotas": float(self.cuotas),
            "inscripciones": float(self.inscripciones),
            "renovaciones": float(self.renovaciones),
            "merchandising": float(self.merchandising),
            "total": float(self.total),
        }


@dataclass
class DashboardStats:
    cuotas_al_dia: int = 0
    cuotas_vencidas: int = 0
    certificados_vencidos: int = 0
    ingresos: Decimal = Decimal("0")
    students_count: int = 0


@dataclass
class StatDetail:
    kind: str
    title: str
    rows: List[Dict[str, Any]] = field(default_factory=list)
    total: Optional[Decimal] = None


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Primer y último día del mes (ambos incluidos)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def split_pases(total: Decimal) -> Tuple[Decimal, Decimal]:
    """(inscripciones, renovaciones) a partir del total de pases."""
    renovaciones = (total * RENEWAL_SHARE_ESTIMATE).quantize(_CENT)
    return total - renovaciones, renovaciones


def _revenue_in_range(uow: UnitOfWork, user_id: int, start: date, end: date, label: str) -> RevenueBreakdown:
    cuotas_total, _ = uow.cuotas.sum_paid_between(user_id, start, end)
    pases_total, _ = uow.pases.sum_between(user_id, start, end)
    merch_total, _ = uow.merchandising.sum_between(user_id, start, end)

    inscripciones, renovaciones = split_pases(pases_total)
    return RevenueBreakdown(
        label=label,
        cuotas=cuotas_total,
        inscripciones=inscripciones,
        renovaciones=renovaciones,
        merchandising=merch_total,
        total=cuotas_total + pases_total + merch_total,
    )


def get_revenue_for_range(user_id: int, start: date, end: date, label: str = "") -> RevenueBreakdown:
    """Ingresos entre `start` y `end` inclusive."""
    with UnitOfWork() as uow:
        return _revenue_in_range(uow, user_id, start, end, label)


def get_monthly_revenue(user_id: int, year: Optional[int] = None) -> List[RevenueBreakdown]:
    """Doce filas (Ene..Dic) con el desglose de ingresos de cada mes."""
    year = year or date.today().year
    rows: List[RevenueBreakdown] = []
    with UnitOfWork() as uow:
        for month, label in enumerate(MONTH_LABELS, start=1):
            start, end = month_bounds(year, month)
            rows.append(_revenue_in_range(uow, user_id, start, end, label))
    return rows


def get_dashboard_stats(user_id: int, year: int, month: int, today: Optional[date] = None) -> DashboardStats:
    today = today or date.today()
    start, end = month_bounds(year, month)

    with UnitOfWork() as uow:
        cuotas_mes = uow.cuotas.list_by_payment_date(user_id, start, end)
        cuotas_al_dia = sum(1 for c in cuotas_mes if c.estado == "pagado")
        cuotas_vencidas = sum(
            1
            for c in cuotas_mes
            if c.estado != "pagado" and c.vencimiento is not None and c.vencimiento < today
        )
        certificados_vencidos = len(uow.students.list_certificates_expiring_before(user_id, today))

        cuotas_total, _ = uow.cuotas.sum_paid_between(user_id, start, end)
        pases_total, _ = uow.pases.sum_between(user_id, start, end)
        merch_total, _ = uow.merchandising.sum_between(user_id, start, end)
        torneos_total, _ = uow.participants.sum_paid_between(user_id, start, end)

        students_count = uow.students.count_for_user(user_id)

    return DashboardStats(
        cuotas_al_dia=cuotas_al_dia,
        cuotas_vencidas=cuotas_vencidas,
        certificados_vencidos=certificados_vencidos,
        ingresos=cuotas_total + pases_total + merch_total + torneos_total,
        students_count=students_count,
    )


def get_stat_detail(user_id: int, kind: str, year: int, month: int, today: Optional[date] = None) -> StatDetail:
    """Filas del modal de detalle de una tarjeta de estadísticas."""
    if kind not in STAT_KINDS:
        raise ValueError(f"Detalle desconocido: {kind}")

    today = today or date.today()
    start, end = month_bounds(year, month)

    with UnitOfWork() as uow:
        if kind == "cuotas-al-dia":
            rows = [
                {
                    "alumna": c.alumna,
                    "grupo": c.grupo,
                    "monto": c.monto,
                    "fecha_pago": c.fecha_pago,
                }
                for c in uow.cuotas.list_by_payment_date(user_id, start, end)
                if c.estado == "pagado"
            ]
            return StatDetail(kind, "Cuotas al día", rows, sum((r["monto"] for r in rows), Decimal("0")))

        if kind == "cuotas-vencidas":
            rows = [
                {
                    "alumna": c.alumna,
                    "grupo": c.grupo,
                    "monto": c.monto,
                    "vencimiento": c.vencimiento,
                    "dias_vencida": (today - c.vencimiento).days,
                }
                for c in uow.cuotas.list_by_payment_date(user_id, start, end)
                if c.estado != "pagado" and c.vencimiento is not None and c.vencimiento < today
            ]
            return StatDetail(kind, "Cuotas vencidas", rows, sum((r["monto"] for r in rows), Decimal("0")))

        if kind == "certificados-vencidos":
            rows = [
                {
                    "alumna": s.full_name,
                    "vencimiento": s.medical_certificate_expiry_date,
                    "dias_vencido": (today - s.medical_certificate_expiry_date).days,
                }
                for s in uow.students.list_certificates_expiring_before(user_id, today)
            ]
            return StatDetail(kind, "Certificados vencidos", rows)

        concepts = [
            ("Cuotas", uow.cuotas.sum_paid_between(user_id, start, end)),
            ("Pases", uow.pases.sum_between(user_id, start, end)),
            ("Merchandising", uow.merchandising.sum_between(user_id, start, end)),
            ("Torneos", uow.participants.sum_paid_between(user_id, start, end)),
        ]

    total = sum((amount for _, (amount, _) in concepts), Decimal("0"))
    rows = []
    for concept, (amount, count) in concepts:
        percentage = (amount * 100 / total).quantize(Decimal("0.1")) if total else Decimal("0")
        rows.append(
            {"concepto": concept, "monto": amount, "cantidad": count, "porcentaje": percentage}
        )
    return StatDetail(kind, "Ingresos del mes", rows, total)


def get_revenue_by_group(user_id: int) -> List[Dict[str, Any]]:
    """Total cobrado de cuotas por grupo."""
    with UnitOfWork() as uow:
        rows = uow.cuotas.sum_paid_by_group(user_id)
    return [{"grupo": grupo, "total": total} for grupo, total in rows]
