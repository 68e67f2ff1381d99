"""
Repository para Student y PaymentRecord.
"""
from datetime import date
from typing import List, Optional

from corpo_libero.models import PaymentRecord, Student
from corpo_libero.repositories.base import OwnedRepository


class StudentRepository(OwnedRepository[Student]):
    def __init__(self, session):
        super().__init__(session, Student)

    def search_by_name(self, user_id: int, term: str, limit: Optional[int] = None) -> List[Student]:
        """Búsqueda por nombre, sin distinguir mayúsculas."""
        query = self.query_for_user(user_id)
        if term:
            query = query.filter(Student.full_name.ilike(f"%{term.strip()}%"))
        query = query.order_by(Student.full_name.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_by_full_name(self, user_id: int, full_name: str) -> Optional[Student]:
        if not full_name:
            return None
        return (
            self.query_for_user(user_id)
            .filter(Student.full_name == full_name.strip())
            .first()
        )

    def list_certificates_expiring_before(self, user_id: int, limit_date: date) -> List[Student]:
        """Alumnas con certificado médico que vence antes de `limit_date` (excluida)."""
        return (
            self.query_for_user(user_id)
            .filter(
                Student.medical_certificate_expiry_date.isnot(None),
                Student.medical_certificate_expiry_date < limit_date,
            )
            .order_by(Student.medical_certificate_expiry_date.asc())
            .all()
        )

    def count_for_user(self, user_id: int) -> int:
        return self.query_for_user(user_id).count()


class PaymentRecordRepository(OwnedRepository[PaymentRecord]):
    def __init__(self, session):
        super().__init__(session, PaymentRecord)

    def list_by_student(self, user_id: int, student_id: int) -> List[PaymentRecord]:
        return (
            self.query_for_user(user_id)
            .filter(PaymentRecord.student_id == student_id)
            .order_by(PaymentRecord.date.desc())
            .all()
        )
