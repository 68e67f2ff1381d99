"""
Package repositories.
Expone los Repository para el acceso a datos.
"""

from .base import SqlAlchemyRepository, OwnedRepository
from .user_repo import UserRepository, ProfileRepository
from .student_repo import StudentRepository, PaymentRecordRepository
from .cuota_repo import CuotaRepository
from .pase_repo import PaseRepository
from .tournament_repo import TournamentRepository, ParticipantRepository
from .merchandising_repo import MerchandisingRepository

__all__ = [
    "SqlAlchemyRepository",
    "OwnedRepository",
    "UserRepository",
    "ProfileRepository",
    "StudentRepository",
    "PaymentRecordRepository",
    "CuotaRepository",
    "PaseRepository",
    "TournamentRepository",
    "ParticipantRepository",
    "MerchandisingRepository",
]
