"""
Repository para Pase.
"""
from datetime import date
from decimal import Decimal
from typing import Tuple

from sqlalchemy import func

from corpo_libero.models import Pase
from corpo_libero.repositories.base import OwnedRepository


class PaseRepository(OwnedRepository[Pase]):
    def __init__(self, session):
        super().__init__(session, Pase)

    def sum_between(self, user_id: int, start: date, end: date) -> Tuple[Decimal, int]:
        """(total, cantidad) de pases con fecha en [start, end]."""
        total, count = (
            self.session.query(func.coalesce(func.sum(Pase.monto), 0), func.count(Pase.id))
            .filter(Pase.user_id == user_id, Pase.fecha >= start, Pase.fecha <= end)
            .one()
        )
        return Decimal(str(total or 0)), int(count or 0)
