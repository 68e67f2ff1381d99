"""
Generic Repository Pattern.
Operaciones CRUD base para cualquier modelo SQLAlchemy, más la variante
filtrada por usuario dueño (`user_id`) que usan todas las tablas de negocio.
"""
from typing import Type, TypeVar, Generic, Optional, List, Iterable
from corpo_libero.extensions import db

# Tipo genérico T: debe ser un modelo SQLAlchemy
T = TypeVar("T", bound=db.Model)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        """Agrega la entidad a la sesión."""
        self.session.add(entity)
        return entity

    def add_all(self, entities: Iterable[T]) -> List[T]:
        """Agrega varias entidades de una vez (insert masivo)."""
        entities = list(entities)
        self.session.add_all(entities)
        return entities

    def get_by_id(self, id: int) -> Optional[T]:
        """Recupera por Primary Key."""
        return self.session.get(self.model_cls, id)


class OwnedRepository(SqlAlchemyRepository[T]):
    """Repositorio para tablas con columna `user_id`."""

    def query_for_user(self, user_id: int):
        return self.session.query(self.model_cls).filter(
            self.model_cls.user_id == user_id
        )

    def get_for_user(self, id: int, user_id: int) -> Optional[T]:
        """Recupera por PK solo si la fila pertenece al usuario."""
        entity = self.get_by_id(id)
        if entity is None or entity.user_id != user_id:
            return None
        return entity

    def list_for_user(self, user_id: int) -> List[T]:
        """Filas del usuario, más recientes primero."""
        return (
            self.query_for_user(user_id)
            .order_by(self.model_cls.created_at.desc(), self.model_cls.id.desc())
            .all()
        )
