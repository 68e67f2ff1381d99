"""
Modelo Pase (tabla: pases).

Pago de pase/renovación de la inscripción anual a la federación.
"""

from datetime import datetime

from corpo_libero.extensions import db


class Pase(db.Model):
    __tablename__ = "pases"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
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
    gimnasio_traspaso = db.Column(db.String(255), nullable=True)
    fecha = db.Column(db.Date, nullable=False, index=True)
    monto = db.Column(db.Numeric(12, 2), nullable=False)
    medio = db.Column(db.String(32), nullable=False)
    year = db.Column(db.Integer, nullable=False, index=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    student = db.relationship("Student", backref="pases")

    def __repr__(self) -> str:
        return f"<Pase id={self.id} student_name={self.student_name!r} year={self.year}>"
