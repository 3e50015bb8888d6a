"""Async repository for association (link) tables keyed by a (left, right) id pair."""

import logging
from typing import List, Optional, Type

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .async_base_repository import AsyncBaseRepository, AsyncRepositoryError, ModelT

logger = logging.getLogger(__name__)


class AsyncLinkRepository(AsyncBaseRepository[ModelT]):
    """Link store for one association table.

    ``left_key`` and ``right_key`` name the two foreign key columns. Every
    method takes the pair in (left, right) order.
    """

    def __init__(self, model: Type[ModelT], left_key: str, right_key: str,
                 session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        super().__init__(model, session_factory)
        self.left_key = left_key
        self.right_key = right_key

    def _pair_clause(self, left_id: int, right_id: int):
        return (
            getattr(self.model, self.left_key) == left_id,
            getattr(self.model, self.right_key) == right_id,
        )

    async def list_by_left(self, left_id: int) -> List[ModelT]:
        """All links attached to a Left entity, in insertion order."""
        stmt = select(self.model).where(getattr(self.model, self.left_key) == left_id).order_by(self.model.id)
        return await self._scalars(stmt, f"list {self.entity_name} by {self.left_key}={left_id}")

    async def list_by_right(self, right_id: int) -> List[ModelT]:
        """All links attached to a Right entity, in insertion order."""
        stmt = select(self.model).where(getattr(self.model, self.right_key) == right_id).order_by(self.model.id)
        return await self._scalars(stmt, f"list {self.entity_name} by {self.right_key}={right_id}")

    async def get_link(self, left_id: int, right_id: int) -> Optional[ModelT]:
        stmt = select(self.model).where(*self._pair_clause(left_id, right_id))
        return await self._scalar_one_or_none(stmt, f"get {self.entity_name} ({left_id}, {right_id})")

    async def link_exists(self, left_id: int, right_id: int) -> bool:
        return await self.exists(**{self.left_key: left_id, self.right_key: right_id})

    async def remove_link(self, left_id: int, right_id: int) -> bool:
        """Delete the link for the pair. Returns False when nothing was deleted."""
        async with self.get_async_session() as session:
            try:
                result = await session.execute(delete(self.model).where(*self._pair_clause(left_id, right_id)))
                await session.commit()
                if not result.rowcount:
                    logger.warning(f"No {self.entity_name} ({left_id}, {right_id}) to remove")
                    return False
                logger.info(f"Removed {self.entity_name} ({left_id}, {right_id})")
                return True
            except Exception as e:
                await session.rollback()
                logger.error(f"Error removing {self.entity_name} ({left_id}, {right_id}): {e}", exc_info=True)
                raise AsyncRepositoryError(f"remove {self.entity_name} failed") from e
