"""
Unit of Work Pattern.
Gestiona la transacción de base de datos y el acceso a los repositorios.
"""
from typing import Optional
from corpo_libero.extensions import db

from corpo_libero.repositories.user_repo import UserRepository, ProfileRepository
from corpo_libero.repositories.student_repo import StudentRepository, PaymentRecordRepository
from corpo_libero.repositories.cuota_repo import CuotaRepository
from corpo_libero.repositories.pase_repo import PaseRepository
from corpo_libero.repositories.tournament_repo import TournamentRepository, ParticipantRepository
from corpo_libero.repositories.merchandising_repo import MerchandisingRepository


class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._users: Optional[UserRepository] = None
        self._profiles: Optional[ProfileRepository] = None
        self._students: Optional[StudentRepository] = None
        self._payment_records: Optional[PaymentRecordRepository] = None
        self._cuotas: Optional[CuotaRepository] = None
        self._pases: Optional[PaseRepository] = None
        self._tournaments: Optional[TournamentRepository] = None
        self._participants: Optional[ParticipantRepository] = None
        self._merchandising: Optional[MerchandisingRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            return False
        # La sesión la cierra Flask-SQLAlchemy al final del request

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    @property
    def profiles(self) -> ProfileRepository:
        if self._profiles is None:
            self._profiles = ProfileRepository(self.session)
        return self._profiles

    @property
    def students(self) -> StudentRepository:
        if self._students is None:
            self._students = StudentRepository(self.session)
        return self._students

    @property
    def payment_records(self) -> PaymentRecordRepository:
        if self._payment_records is None:
            self._payment_records = PaymentRecordRepository(self.session)
        return self._payment_records

    @property
    def cuotas(self) -> CuotaRepository:
        if self._cuotas is None:
            self._cuotas = CuotaRepository(self.session)
        return self._cuotas

    @property
    def pases(self) -> PaseRepository:
        if self._pases is None:
            self._pases = PaseRepository(self.session)
        return self._pases

    @property
    def tournaments(self) -> TournamentRepository:
        if self._tournaments is None:
            self._tournaments = TournamentRepository(self.session)
        return self._tournaments

    @property
    def participants(self) -> ParticipantRepository:
        if self._participants is None:
            self._participants = ParticipantRepository(self.session)
        return self._participants

    @property
    def merchandising(self) -> MerchandisingRepository:
        if self._merchandising is None:
            self._merchandising = MerchandisingRepository(self.session)
        return self._merchandising

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
