"""
Modelo Cuota (tabla: cuotas).

Cuota mensual de una alumna, ligada por nombre y grupo.
"""

from datetime import datetime

from corpo_libero.extensions import db


class Cuota(db.Model):
    __tablename__ = "cuotas"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    alumna = db.Column(db.String(255), nullable=False, index=True)
    grupo = db.Column(db.String(64), nullable=False)  # jardin, escuela, competencia
    monto = db.Column(db.Numeric(12, 2), nullable=False)
    medio = db.Column(db.String(32), nullable=False)  # transferencia, efectivo, tarjeta

    fecha_pago = db.Column(db.Date, nullable=True, index=True)
    vencimiento = db.Column(db.Date, nullable=True, index=True)

    # es. "pagado", "pendiente", "vencido"
    estado = db.Column(db.String(32), nullable=True, default="pagado", index=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    def __repr__(self) -> str:
        return f"<Cuota id={self.id} alumna={self.alumna!r} estado={self.estado!r}>"
