"""
Repository para MerchandisingOrder.
"""
from datetime import date
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import func

from corpo_libero.models import MerchandisingOrder
from corpo_libero.repositories.base import OwnedRepository


class MerchandisingRepository(OwnedRepository[MerchandisingOrder]):
    def __init__(self, session):
        super().__init__(session, MerchandisingOrder)

    def list_unpaid(self, user_id: int) -> List[MerchandisingOrder]:
        """Pedidos sin pago completo."""
        return (
            self.query_for_user(user_id)
            .filter(MerchandisingOrder.pago_completo.is_(False))
            .order_by(MerchandisingOrder.fecha.asc())
            .all()
        )

    def sum_between(self, user_id: int, start: date, end: date) -> Tuple[Decimal, int]:
        """(total, cantidad) de pedidos con fecha en [start, end]."""
        total, count = (
            self.session.query(
                func.coalesce(func.sum(MerchandisingOrder.monto), 0),
                func.count(MerchandisingOrder.id),
            )
            .filter(
                MerchandisingOrder.user_id == user_id,
                MerchandisingOrder.fecha >= start,
                MerchandisingOrder.fecha <= end,
            )
            .one()
        )
        return Decimal(str(total or 0)), int(count or 0)
