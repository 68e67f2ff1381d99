"""DTO para los formularios de alumnas e inscripciones."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from .form_fields import parse_bool, parse_date, parse_decimal, parse_int


def _text(args: Mapping[str, Any], key: str) -> str:
    return (args.get(key) or "").strip()


@dataclass
class StudentFormData:
    """Alta/edición de alumna (ficha completa)."""

    full_name: str = ""
    school: str = ""
    birth_date: Optional[date] = None
    dni: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
    level: str = "inicial"
    medical_certificate_status: str = "pending"
    medical_certificate_expiry_date: Optional[date] = None
    federation_status: str = "inactive"
    federation_payment_date: Optional[date] = None
    federation_amount: Optional[Decimal] = None
    federation_payment_method: str = "transferencia"

    @classmethod
    def from_form(cls, args: Mapping[str, Any]) -> "StudentFormData":
        return cls(
            full_name=_text(args, "full_name"),
            school=_text(args, "school"),
            birth_date=parse_date(args.get("birth_date")),
            dni=_text(args, "dni"),
            phone=_text(args, "phone"),
            email=_text(args, "email"),
            address=_text(args, "address"),
            level=_text(args, "level") or "inicial",
            medical_certificate_status=_text(args, "medical_certificate_status") or "pending",
            medical_certificate_expiry_date=parse_date(args.get("medical_certificate_expiry_date")),
            federation_status=_text(args, "federation_status") or "inactive",
            federation_payment_date=parse_date(args.get("federation_payment_date")),
            federation_amount=parse_decimal(args.get("federation_amount")),
            federation_payment_method=_text(args, "federation_payment_method") or "transferencia",
        )

    def to_columns(self) -> Dict[str, Any]:
        """Valores listos para las columnas de Student (vacío -> NULL)."""
        return {
            "full_name": self.full_name,
            "school": self.school or None,
            "birth_date": self.birth_date,
            "dni": self.dni or None,
            "phone": self.phone or None,
            "email": self.email or None,
            "address": self.address or None,
            "level": self.level or None,
            "medical_certificate_status": self.medical_certificate_status,
            "medical_certificate_expiry_date": self.medical_certificate_expiry_date,
            "federation_status": self.federation_status,
            "federation_payment_date": self.federation_payment_date,
            "federation_amount": self.federation_amount or None,
            "federation_payment_method": self.federation_payment_method,
        }


@dataclass
class RegistrationFormData:
    """Formulario de inscripción de una alumna nueva."""

    full_name: str = ""
    birth_date: Optional[date] = None
    dni: str = ""
    address: str = ""
    phone: str = ""
    contact_name: str = ""
    email: str = ""
    medical_certificate_date: Optional[date] = None
    school: str = ""
    payment_date: Optional[date] = None
    payment_method: str = ""
    amount: Optional[Decimal] = None

    @classmethod
    def from_form(cls, args: Mapping[str, Any]) -> "RegistrationFormData":
        return cls(
            full_name=_text(args, "full_name"),
            birth_date=parse_date(args.get("birth_date")),
            dni=_text(args, "dni"),
            address=_text(args, "address"),
            phone=_text(args, "phone"),
            contact_name=_text(args, "contact_name"),
            email=_text(args, "email"),
            medical_certificate_date=parse_date(args.get("medical_certificate_date")),
            school=_text(args, "school"),
            payment_date=parse_date(args.get("payment_date")),
            payment_method=_text(args, "payment_method"),
            amount=parse_decimal(args.get("amount")),
        )


@dataclass
class AnnualRegistrationData:
    """
    Gestión de la inscripción anual: renovación de una alumna existente
    (student_id) o inscripción nueva (full_name, school, level).
    """

    approved: bool = False
    amount: Optional[Decimal] = None
    date: Optional[date] = None
    payment_method: str = ""
    student_id: Optional[int] = None
    full_name: str = ""
    school: str = ""
    level: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_form(cls, args: Mapping[str, Any]) -> "AnnualRegistrationData":
        return cls(
            approved=parse_bool(args.get("approved")),
            amount=parse_decimal(args.get("amount")),
            date=parse_date(args.get("date")),
            payment_method=_text(args, "payment_method"),
            student_id=parse_int(args.get("student_id")),
            full_name=_text(args, "full_name"),
            school=_text(args, "school"),
            level=_text(args, "level"),
        )
