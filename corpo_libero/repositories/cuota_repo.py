"""
Repository para Cuota.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, or_

from corpo_libero.models import Cuota
from corpo_libero.repositories.base import OwnedRepository

PAID_STATUS = "pagado"


class CuotaRepository(OwnedRepository[Cuota]):
    def __init__(self, session):
        super().__init__(session, Cuota)

    def search(self, user_id: int, term: Optional[str] = None) -> List[Cuota]:
        """Cuotas del usuario (más recientes primero), filtradas por nombre de alumna."""
        query = self.query_for_user(user_id)
        if term:
            query = query.filter(Cuota.alumna.ilike(f"%{term.strip()}%"))
        return query.order_by(Cuota.created_at.desc(), Cuota.id.desc()).all()

    def list_overdue(self, user_id: int, today: date) -> List[Cuota]:
        """
        Cuotas impagas con vencimiento anterior a `today`.

        Un estado NULL se considera impago.
        """
        return (
            self.query_for_user(user_id)
            .filter(
                or_(Cuota.estado.is_(None), Cuota.estado != PAID_STATUS),
                Cuota.vencimiento.isnot(None),
                Cuota.vencimiento < today,
            )
            .order_by(Cuota.vencimiento.asc())
            .all()
        )

    def list_by_payment_date(self, user_id: int, start: date, end: date) -> List[Cuota]:
        """Cuotas con fecha de pago en [start, end]."""
        return (
            self.query_for_user(user_id)
            .filter(Cuota.fecha_pago >= start, Cuota.fecha_pago <= end)
            .order_by(Cuota.fecha_pago.asc())
            .all()
        )

    def sum_paid_between(self, user_id: int, start: date, end: date) -> Tuple[Decimal, int]:
        """(total, cantidad) de cuotas pagadas con fecha de pago en [start, end]."""
        total, count = (
            self.session.query(func.coalesce(func.sum(Cuota.monto), 0), func.count(Cuota.id))
            .filter(
                Cuota.user_id == user_id,
                Cuota.estado == PAID_STATUS,
                Cuota.fecha_pago >= start,
                Cuota.fecha_pago <= end,
            )
            .one()
        )
        return Decimal(str(total or 0)), int(count or 0)

    def sum_paid_by_group(self, user_id: int) -> List[Tuple[str, Decimal]]:
        rows = (
            self.session.query(Cuota.grupo, func.coalesce(func.sum(Cuota.monto), 0))
            .filter(Cuota.user_id == user_id, Cuota.estado == PAID_STATUS)
            .group_by(Cuota.grupo)
            .order_by(Cuota.grupo.asc())
            .all()
        )
        return [(grupo, Decimal(str(total or 0))) for grupo, total in rows]
