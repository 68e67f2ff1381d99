"""
Modelo Student (tabla: students) e historial de pagos (tabla: payment_records).

El certificado médico y la federación son sub-registros embebidos
en columnas con prefijo `medical_certificate_` y `federation_`.
"""

from datetime import datetime

from corpo_libero.extensions import db


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Datos personales
    full_name = db.Column(db.String(255), nullable=False, index=True)
    school = db.Column(db.String(255), nullable=True)
    birth_date = db.Column(db.Date, nullable=True)
    dni = db.Column(db.String(32), nullable=True)
    phone = db.Column(db.String(64), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    level = db.Column(db.String(64), nullable=True)
    photo = db.Column(db.String(500), nullable=True)  # URL pública

    # Certificado médico: "active", "expired", "pending"
    medical_certificate_status = db.Column(db.String(16), nullable=True, default="pending")
    medical_certificate_expiry_date = db.Column(db.Date, nullable=True, index=True)
    medical_certificate_file = db.Column(db.String(500), nullable=True)

    # Federación: "active", "inactive", "pending"
    federation_status = db.Column(db.String(16), nullable=True, default="inactive")
    federation_payment_date = db.Column(db.Date, nullable=True)
    federation_amount = db.Column(db.Numeric(12, 2), nullable=True)
    federation_payment_method = db.Column(db.String(32), nullable=True)

    # Timestamps
    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    payment_records = db.relationship(
        "PaymentRecord",
        back_populates="student",
        order_by="PaymentRecord.date.desc()",
    )

    @property
    def initials(self) -> str:
        if not self.full_name:
            return "NA"
        return "".join(part[0] for part in self.full_name.split() if part).upper()

    def __repr__(self) -> str:
        return f"<Student id={self.id} full_name={self.full_name!r}>"


class PaymentRecord(db.Model):
    __tablename__ = "payment_records"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date = db.Column(db.Date, nullable=False, index=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    concept = db.Column(db.String(255), nullable=False)
    payment_method = db.Column(db.String(32), nullable=False)

    # "paid", "pending", "overdue"
    status = db.Column(db.String(16), nullable=True, default="paid")

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    student = db.relationship("Student", back_populates="payment_records")

    def __repr__(self) -> str:
        return (
            f"<PaymentRecord id={self.id} student_id={self.student_id} "
            f"status={self.status!r}>"
        )
