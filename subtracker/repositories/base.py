"""Base repository with generic CRUD operations.

Concrete repositories inherit from this and can add domain-specific queries.
"""

from typing import TypeVar, Generic, Type

from subtracker.extensions import db

T = TypeVar("T", bound=db.Model)


class BaseRepository(Generic[T]):
    """Generic repository providing common database operations.

    Args:
        model_class: The SQLAlchemy model class to operate on.
    """

    def __init__(self, model_class: Type[T]):
        self._model = model_class

    def create(self, instance: T) -> T:
        """Add a new record and flush to obtain its id."""
        db.session.add(instance)
        db.session.flush()
        return instance

    def get_by_id(self, record_id) -> T | None:
        """Fetch a single record by primary key."""
        return db.session.get(self._model, record_id)

    def count(self) -> int:
        """Return the number of rows in the table."""
        return self._model.query.count()

    def delete_by_id(self, record_id) -> bool:
        """Delete a record by primary key; ``False`` if no row matched."""
        deleted = self._model.query.filter_by(id=record_id).delete()
        return deleted > 0

    @staticmethod
    def commit() -> None:
        """Commit the current transaction."""
        db.session.commit()

    @staticmethod
    def rollback() -> None:
        """Discard the current transaction after a failure."""
        db.session.rollback()
