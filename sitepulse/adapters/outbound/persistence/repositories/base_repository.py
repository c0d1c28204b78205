# sitepulse/adapters/outbound/persistence/repositories/base_repository.py

from typing import Any, Dict, Generic, List, Type, TypeVar
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select
import logging

from sitepulse.adapters.outbound.persistence.database import Base
from sitepulse.domain.exceptions import DatabaseOperationException

# Generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)

# Configure logger
logger = logging.getLogger(__name__)


class AsyncCRUDBase(Generic[ModelType]):
    """
    Async base class for implementing the Repository pattern.

    Provides generic create/list/delete operations with consistent
    error handling and logging.

    Attributes:
        model: SQLAlchemy model class
        logger: Configured logger for the class
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    def _apply_filters(self, query, filters: Dict[str, Any]):
        for field, value in filters.items():
            if hasattr(self.model, field) and value is not None:
                query = query.where(getattr(self.model, field) == value)
        return query

    async def get_multi(self, db: AsyncSession, **filters) -> List[ModelType]:
        """
        Get every entity matching the equality filters, ordered by ID.

        Filters whose value is None are ignored.

        Raises:
            DatabaseOperationException: If an error occurs in the query
        """
        try:
            query = self._apply_filters(select(self.model), filters).order_by(self.model.id)
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing {self.model.__name__}s: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error listing {self.model.__name__}s",
                original_error=e
            )

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new entity.

        Args:
            db: Async database session
            obj_in: Column values of the new entity

        Returns:
            Newly created entity

        Raises:
            DatabaseOperationException: If a database error occurs
        """
        try:
            db_obj = self.model(**obj_in)
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)

            self.logger.debug(f"{self.model.__name__} created with ID: {db_obj.id}")
            return db_obj

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error creating {self.model.__name__}",
                original_error=e
            )

    async def delete_where(self, db: AsyncSession, **filters) -> int:
        """
        Delete every entity matching the filters.

        Returns:
            Number of deleted rows

        Raises:
            DatabaseOperationException: If an error occurs during removal
        """
        if not filters:
            raise ValueError("delete_where requires at least one filter")
        try:
            stmt = delete(self.model)
            for field, value in filters.items():
                stmt = stmt.where(getattr(self.model, field) == value)
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount or 0
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error removing {self.model.__name__}: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Error removing {self.model.__name__}",
                original_error=e
            )
