"""
Repository para User y Profile.
"""
from typing import Optional

from corpo_libero.models import Profile, User
from corpo_libero.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Busca por email exacto (normalizado en minúsculas)."""
        if not email:
            return None
        return (
            self.session.query(User)
            .filter(User.email == email.strip().lower())
            .first()
        )


class ProfileRepository(SqlAlchemyRepository[Profile]):
    def __init__(self, session):
        super().__init__(session, Profile)

    def get_by_user_id(self, user_id: int) -> Optional[Profile]:
        return self.session.query(Profile).filter_by(user_id=user_id).first()
