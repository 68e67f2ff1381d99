"""
Paquete de modelos SQLAlchemy.

Cada tabla de negocio lleva `user_id`: todas las consultas se filtran
por el usuario dueño de los datos.
"""

from .user import User, Profile
from .student import Student, PaymentRecord
from .cuota import Cuota
from .pase import Pase
from .tournament import Tournament, TournamentParticipant
from .merchandising_order import MerchandisingOrder

__all__ = [
    "User",
    "Profile",
    "Student",
    "PaymentRecord",
    "Cuota",
    "Pase",
    "Tournament",
    "TournamentParticipant",
    "MerchandisingOrder",
]
