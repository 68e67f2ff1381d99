"""
Repository para Tournament y TournamentParticipant.
"""
from datetime import date
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import joinedload, selectinload

from corpo_libero.models import Tournament, TournamentParticipant
from corpo_libero.repositories.base import OwnedRepository


class TournamentRepository(OwnedRepository[Tournament]):
    def __init__(self, session):
        super().__init__(session, Tournament)

    def list_with_participants(self, user_id: int) -> List[Tournament]:
        """Torneos del usuario (más recientes primero) con participantes precargados."""
        return (
            self.query_for_user(user_id)
            .options(selectinload(Tournament.participants))
            .order_by(Tournament.created_at.desc(), Tournament.id.desc())
            .all()
        )


class ParticipantRepository(OwnedRepository[TournamentParticipant]):
    def __init__(self, session):
        super().__init__(session, TournamentParticipant)

    def list_partial(self, user_id: int) -> List[TournamentParticipant]:
        return (
            self.query_for_user(user_id)
            .options(joinedload(TournamentParticipant.tournament))
            .filter(TournamentParticipant.payment_status == "partial")
            .all()
        )

    def sum_paid_between(self, user_id: int, start: date, end: date) -> Tuple[Decimal, int]:
        """(total, cantidad) de inscripciones a torneos pagadas en [start, end]."""
        total, count = (
            self.session.query(
                func.coalesce(func.sum(TournamentParticipant.payment_amount), 0),
                func.count(TournamentParticipant.id),
            )
            .filter(
                TournamentParticipant.user_id == user_id,
                TournamentParticipant.payment_status == "paid",
                TournamentParticipant.payment_date >= start,
                TournamentParticipant.payment_date <= end,
            )
            .one()
        )
        return Decimal(str(total or 0)), int(count or 0)
