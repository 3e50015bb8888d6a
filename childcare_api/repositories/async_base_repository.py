"""
Async base repository class that all async repositories inherit from.

Provides the generic CRUD surface shared by every entity table:
``get_all``, ``get_by_id``, ``find``, ``exists``, ``add``, ``update`` and ``delete``.
"""
import logging
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import exists as sql_exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..models.async_db import get_async_session

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class AsyncRepositoryError(Exception):
    """Exception raised by async repository operations."""
    pass


class IntegrityConstraintError(AsyncRepositoryError):
    """Raised when a write violates a unique or foreign key constraint."""
    pass


class AsyncBaseRepository(Generic[ModelT]):
    """Generic async repository bound to one ORM model."""

    model: Type[ModelT]

    def __init__(self, model: Optional[Type[ModelT]] = None,
                 session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        """Initialize the repository.

        Args:
            model: ORM model class. Subclasses may set it as a class attribute instead.
            session_factory: Session factory to use. Defaults to the shared one.
        """
        if model is not None:
            self.model = model
        if getattr(self, "model", None) is None:
            raise ValueError(f"{type(self).__name__} requires an ORM model")
        self.session_factory = session_factory

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def get_async_session(self):
        """Get an async database session manager.

        Returns:
            AsyncSessionManager: An async context manager for database sessions.
        """
        return get_async_session(self.session_factory)

    async def _scalars(self, stmt, operation_name: str) -> List[ModelT]:
        async with self.get_async_session() as session:
            try:
                result = await session.execute(stmt)
                return list(result.scalars().unique().all())
            except Exception as e:
                logger.error(f"Error during {operation_name}: {e}", exc_info=True)
                raise AsyncRepositoryError(f"{operation_name} failed") from e

    async def _scalar_one_or_none(self, stmt, operation_name: str) -> Optional[ModelT]:
        async with self.get_async_session() as session:
            try:
                result = await session.execute(stmt)
                return result.scalars().unique().one_or_none()
            except Exception as e:
                logger.error(f"Error during {operation_name}: {e}", exc_info=True)
                raise AsyncRepositoryError(f"{operation_name} failed") from e

    async def get_all(self) -> List[ModelT]:
        """Return every row of the table, in primary key order."""
        stmt = select(self.model).order_by(self.model.id)
        return await self._scalars(stmt, f"get_all {self.entity_name}")

    async def get_by_id(self, entity_id: int, *options: Any) -> Optional[ModelT]:
        """Return the row with the given id, or None.

        Args:
            entity_id: Primary key
            options: Optional loader options (e.g. ``selectinload``) applied to the query
        """
        stmt = select(self.model).where(self.model.id == entity_id)
        if options:
            stmt = stmt.options(*options)
        return await self._scalar_one_or_none(stmt, f"get {self.entity_name} {entity_id}")

    async def find(self, **criteria: Any) -> List[ModelT]:
        """Return the rows whose columns equal the given values."""
        stmt = select(self.model).filter_by(**criteria).order_by(self.model.id)
        return await self._scalars(stmt, f"find {self.entity_name} {criteria}")

    async def exists(self, **criteria: Any) -> bool:
        """Return True when at least one row matches the given column values."""
        stmt = select(sql_exists().where(*[getattr(self.model, key) == value for key, value in criteria.items()]))
        async with self.get_async_session() as session:
            try:
                result = await session.execute(stmt)
                return bool(result.scalar())
            except Exception as e:
                logger.error(f"Error checking {self.entity_name} existence for {criteria}: {e}", exc_info=True)
                raise AsyncRepositoryError(f"exists {self.entity_name} failed") from e

    async def add(self, entity: ModelT) -> Optional[ModelT]:
        """Insert a new row.

        Returns:
            The persisted entity with its generated id, or None if the write failed.

        Raises:
            IntegrityConstraintError: If the row violates a unique or foreign key constraint.
        """
        async with self.get_async_session() as session:
            try:
                session.add(entity)
                await session.flush()
                await session.commit()
                logger.info(f"Added {self.entity_name} (ID: {entity.id})")
                return entity
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"{self.entity_name} rejected by integrity constraint: {e.orig}")
                raise IntegrityConstraintError(f"{self.entity_name} violates an integrity constraint") from e
            except Exception as e:
                await session.rollback()
                logger.error(f"Error adding {self.entity_name}: {e}", exc_info=True)
                return None

    async def update(self, entity: ModelT) -> bool:
        """Persist the changes made to a detached entity.

        Raises:
            IntegrityConstraintError: If the new values violate a unique or foreign key constraint.
        """
        async with self.get_async_session() as session:
            try:
                await session.merge(entity)
                await session.commit()
                logger.info(f"Updated {self.entity_name} {entity.id}")
                return True
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"{self.entity_name} {entity.id} update rejected by integrity constraint: {e.orig}")
                raise IntegrityConstraintError(f"{self.entity_name} violates an integrity constraint") from e
            except Exception as e:
                await session.rollback()
                logger.error(f"Error updating {self.entity_name} {entity.id}: {e}", exc_info=True)
                return False

    async def delete(self, entity_id: int) -> bool:
        """Delete the row with the given id.

        Raises:
            IntegrityConstraintError: If other rows still reference it.
        """
        async with self.get_async_session() as session:
            try:
                entity = await session.get(self.model, entity_id)
                if not entity:
                    logger.warning(f"{self.entity_name} {entity_id} not found for deletion")
                    return False

                await session.delete(entity)
                await session.commit()
                logger.info(f"Deleted {self.entity_name} {entity_id}")
                return True
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"{self.entity_name} {entity_id} still referenced: {e.orig}")
                raise IntegrityConstraintError(f"{self.entity_name} {entity_id} is still referenced") from e
            except Exception as e:
                await session.rollback()
                logger.error(f"Error deleting {self.entity_name} {entity_id}: {e}", exc_info=True)
                return False
