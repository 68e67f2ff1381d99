"""
Modelos Tournament (tabla: tournaments) y TournamentParticipant
(tabla: tournament_participants).
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from corpo_libero.extensions import db


class Tournament(db.Model):
    __tablename__ = "tournaments"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = db.Column(db.String(255), nullable=False)
    date = db.Column(db.Date, nullable=False, index=True)
    location = db.Column(db.String(255), nullable=False)
    # Lista de etiquetas de categoría, es. ["Nivel 1", "Nivel 2"]
    category = db.Column(db.JSON, nullable=False, default=list)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    participants = db.relationship(
        "TournamentParticipant",
        back_populates="tournament",
        order_by="TournamentParticipant.id.asc()",
    )

    def __repr__(self) -> str:
        return f"<Tournament id={self.id} name={self.name!r}>"


class TournamentParticipant(db.Model):
    __tablename__ = "tournament_participants"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tournament_id = db.Column(
        db.Integer,
        db.ForeignKey("tournaments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    student_name = db.Column(db.String(255), nullable=False)
    level = db.Column(db.String(64), nullable=False)

    # Pago embebido
    payment_date = db.Column(db.Date, nullable=True, index=True)
    payment_amount = db.Column(db.Numeric(12, 2), nullable=True)  # abonado
    amount_due = db.Column(db.Numeric(12, 2), nullable=True)  # arancel del torneo
    payment_method = db.Column(db.String(32), nullable=True)
    payment_status = db.Column(db.String(16), nullable=True, default="pending", index=True)
    observation = db.Column(db.Text, nullable=True)
    due_date = db.Column(db.Date, nullable=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    tournament = db.relationship("Tournament", back_populates="participants")
    student = db.relationship("Student", backref="tournament_participations")

    @property
    def remaining_amount(self) -> Optional[Decimal]:
        """Saldo pendiente; None si no se cargó el arancel."""
        if self.amount_due is None:
            return None
        return Decimal(self.amount_due) - Decimal(self.payment_amount or 0)

    def __repr__(self) -> str:
        return (
            f"<TournamentParticipant id={self.id} tournament_id={self.tournament_id} "
            f"payment_status={self.payment_status!r}>"
        )
