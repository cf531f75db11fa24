"""
Base repository with generic store primitives.

This module provides a generic BaseRepository class that exposes the
find / insert / update-with-patch / delete-by-filter operations the
services rely on, for any SQLAlchemy model. Writes are flushed but never
committed here; the UnitOfWork owns the transaction.
"""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any, NamedTuple
from sqlalchemy.orm import Session
from sqlalchemy import desc, asc

from aicalendar.models.base import Base
from aicalendar.core.exceptions import DatabaseException


# Generic type bound to SQLAlchemy Base
ModelType = TypeVar("ModelType", bound=Base)


class UpdateResult(NamedTuple):
    """Outcome of an update-one: how many rows matched and how many changed."""

    matched_count: int
    modified_count: int


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository with store primitives.

    Type Parameters:
        ModelType: The SQLAlchemy model type this repository manages

    Example:
        class EventRepository(BaseRepository[Event]):
            def __init__(self, db: Session):
                super().__init__(Event, db)

            def find_owned_by(self, user_id: str) -> List[Event]:
                return self.find({"owner_user_id": user_id})
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: SQLAlchemy database session
        """
        self.model = model
        self.db = db

    def _filtered(self, filters: Optional[Dict[str, Any]]):
        query = self.db.query(self.model)
        for key, value in (filters or {}).items():
            if not hasattr(self.model, key):
                raise DatabaseException(f"{self.model.__name__} has no field {key}")
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                query = query.filter(column.in_(list(value)))
            else:
                query = query.filter(column == value)
        return query

    def get(self, id: str) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        try:
            return self.db.query(self.model).filter(self.model.id == id).first()
        except Exception as e:
            raise DatabaseException(f"Failed to get {self.model.__name__} with id {id}") from e

    def find(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = False
    ) -> List[ModelType]:
        """
        Get records matching filters.

        Args:
            filters: Field names mapped to a value (equality) or a collection (membership)
            order_by: Field name to order by
            order_desc: Whether to order descending

        Returns:
            List of model instances matching filters
        """
        try:
            query = self._filtered(filters)
            if order_by and hasattr(self.model, order_by):
                order_column = getattr(self.model, order_by)
                query = query.order_by(desc(order_column) if order_desc else asc(order_column))
            return query.all()
        except DatabaseException:
            raise
        except Exception as e:
            raise DatabaseException(f"Failed to filter {self.model.__name__}") from e

    def find_one(self, filters: Dict[str, Any]) -> Optional[ModelType]:
        """Get the first record matching filters, or None."""
        try:
            return self._filtered(filters).first()
        except DatabaseException:
            raise
        except Exception as e:
            raise DatabaseException(f"Failed to filter {self.model.__name__}") from e

    def insert_one(self, obj: ModelType) -> ModelType:
        """
        Insert a new record.

        Args:
            obj: Model instance to insert

        Returns:
            The instance with its ID populated
        """
        try:
            self.db.add(obj)
            self.db.flush()
            return obj
        except Exception as e:
            raise DatabaseException(f"Failed to insert {self.model.__name__}") from e

    def insert_from_dict(self, data: Dict[str, Any]) -> ModelType:
        """Insert a new record built from a dictionary of field values."""
        return self.insert_one(self.model(**data))

    def update_one(self, id: str, patch: Dict[str, Any]) -> UpdateResult:
        """
        Apply a partial update to a record by ID.

        Only fields whose value actually differs count as modifications.

        Args:
            id: Primary key value
            patch: Dictionary of fields to set

        Returns:
            UpdateResult with matched and modified counts
        """
        try:
            obj = self.get(id)
            if obj is None:
                return UpdateResult(0, 0)

            changed = False
            for key, value in patch.items():
                if not hasattr(obj, key):
                    raise DatabaseException(f"{self.model.__name__} has no field {key}")
                if getattr(obj, key) != value:
                    setattr(obj, key, value)
                    changed = True

            if changed:
                self.db.flush()
            return UpdateResult(1, 1 if changed else 0)
        except DatabaseException:
            raise
        except Exception as e:
            raise DatabaseException(f"Failed to update {self.model.__name__} by id") from e

    def delete_one(self, filters: Dict[str, Any]) -> int:
        """
        Delete the first record matching filters.

        Returns:
            Number of deleted records (0 or 1)
        """
        try:
            obj = self._filtered(filters).first()
            if obj is None:
                return 0
            self.db.delete(obj)
            self.db.flush()
            return 1
        except DatabaseException:
            raise
        except Exception as e:
            raise DatabaseException(f"Failed to delete {self.model.__name__}") from e

    def delete_many(self, filters: Dict[str, Any]) -> int:
        """
        Delete every record matching filters.

        Returns:
            Number of deleted records
        """
        try:
            deleted = self._filtered(filters).delete(synchronize_session="fetch")
            self.db.flush()
            return deleted
        except DatabaseException:
            raise
        except Exception as e:
            raise DatabaseException(f"Failed to delete {self.model.__name__} records") from e

