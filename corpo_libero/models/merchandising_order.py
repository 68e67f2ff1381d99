"""
Modelo MerchandisingOrder (tabla: merchandising_orders).
"""

from datetime import datetime
from decimal import Decimal

from corpo_libero.extensions import db


class MerchandisingOrder(db.Model):
    __tablename__ = "merchandising_orders"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    producto = db.Column(db.String(255), nullable=False)
    talle = db.Column(db.String(32), nullable=False, default="")
    alumna = db.Column(db.String(255), nullable=False)
    monto = db.Column(db.Numeric(12, 2), nullable=False)  # total
    monto_pagado = db.Column(db.Numeric(12, 2), nullable=True)
    medio = db.Column(db.String(32), nullable=False)
    observacion_pago = db.Column(db.String(16), nullable=True)  # completo, parcial
    observacion = db.Column(db.Text, nullable=True)
    fecha = db.Column(db.Date, nullable=False, index=True)

    entregado = db.Column(db.Boolean, nullable=False, default=False)
    pago_completo = db.Column(db.Boolean, nullable=False, default=False, index=True)
    alerta_enviada = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def paid_amount(self) -> Decimal:
        if self.pago_completo:
            return Decimal(self.monto or 0)
        return Decimal(self.monto_pagado or 0)

    @property
    def remaining_amount(self) -> Decimal:
        return Decimal(self.monto or 0) - self.paid_amount

    def __repr__(self) -> str:
        return (
            f"<MerchandisingOrder id={self.id} producto={self.producto!r} "
            f"pago_completo={self.pago_completo}>"
        )
