"""
Link manager - lifecycle of association records between two entity kinds.

One generic manager serves every relationship kind; a ``RelationDefinition``
supplies the key field names, the creation check order and the messages.

A link is created only when both endpoints exist and no link exists yet for
the pair. The pair is immutable once created; updates touch metadata only.
"""
import logging
from typing import Any, List, Optional

from pydantic import BaseModel

from ..exceptions import ConflictError, InternalError, NotFoundError
from ..mapping import EntityMapper
from ..repositories.async_base_repository import IntegrityConstraintError
from .relations import LEFT_FIRST, RelationDefinition

logger = logging.getLogger(__name__)


class LinkManager:
    """Service enforcing the link invariants for one relationship kind.

    Args:
        relation: Relationship definition (keys, check order, messages)
        left_repository: Existence oracle for Left entities (``exists(**criteria)``)
        right_repository: Existence oracle for Right entities
        link_repository: Link store keyed by (left_id, right_id)
        mapper: Request/record/response conversions. Defaults to a mapper
            built from the relation that never overwrites the key pair.
    """

    def __init__(self, relation: RelationDefinition, left_repository: Any,
                 right_repository: Any, link_repository: Any,
                 mapper: Optional[EntityMapper] = None):
        self.relation = relation
        self.messages = relation.messages
        self.left_repo = left_repository
        self.right_repo = right_repository
        self.link_repo = link_repository
        self.mapper = mapper or EntityMapper(
            relation.record_cls,
            relation.response_cls,
            immutable_fields=("id", relation.left_key, relation.right_key),
        )

    def _key_pair(self, request: BaseModel):
        return getattr(request, self.relation.left_key), getattr(request, self.relation.right_key)

    async def _ensure_left_exists(self, left_id: int) -> None:
        if not await self.left_repo.exists(id=left_id):
            logger.warning(f"[{self.relation.name}] left entity {left_id} not found")
            raise NotFoundError(self.messages.left_not_found)

    async def _ensure_right_exists(self, right_id: int) -> None:
        if not await self.right_repo.exists(id=right_id):
            logger.warning(f"[{self.relation.name}] right entity {right_id} not found")
            raise NotFoundError(self.messages.right_not_found)

    async def list_for_left(self, left_id: int) -> List[BaseModel]:
        """Links attached to a Left entity.

        Raises:
            NotFoundError: If the Left entity does not exist
        """
        await self._ensure_left_exists(left_id)
        links = await self.link_repo.list_by_left(left_id)
        return self.mapper.to_responses(links)

    async def list_for_right(self, right_id: int) -> List[BaseModel]:
        """Links attached to a Right entity.

        Raises:
            NotFoundError: If the Right entity does not exist
        """
        await self._ensure_right_exists(right_id)
        links = await self.link_repo.list_by_right(right_id)
        return self.mapper.to_responses(links)

    async def link_exists(self, left_id: int, right_id: int) -> bool:
        return await self.link_repo.link_exists(left_id, right_id)

    async def create(self, request: BaseModel) -> BaseModel:
        """Create a link after checking both endpoints and uniqueness.

        Returns:
            The created link, read back from the store

        Raises:
            NotFoundError: If either endpoint does not exist
            ConflictError: If a link already exists for the pair
            InternalError: If mapping fails or the created link cannot be read back
        """
        left_id, right_id = self._key_pair(request)

        if self.relation.check_order == LEFT_FIRST:
            await self._ensure_left_exists(left_id)
            await self._ensure_right_exists(right_id)
        else:
            await self._ensure_right_exists(right_id)
            await self._ensure_left_exists(left_id)

        if await self.link_repo.link_exists(left_id, right_id):
            logger.warning(f"[{self.relation.name}] link ({left_id}, {right_id}) already exists")
            raise ConflictError(self.messages.conflict)

        record = self.mapper.to_record(request)
        if record is None:
            logger.error(f"[{self.relation.name}] mapping returned nothing for ({left_id}, {right_id})")
            raise InternalError(self.messages.mapping_failed)

        try:
            await self.link_repo.add(record)
        except IntegrityConstraintError as e:
            # Lost the race against a concurrent create for the same pair
            raise ConflictError(self.messages.conflict) from e

        created = await self.link_repo.get_link(left_id, right_id)
        if created is None:
            logger.error(f"[{self.relation.name}] link ({left_id}, {right_id}) not found after insert")
            raise InternalError(self.messages.creation_failed)

        logger.info(f"[{self.relation.name}] created link ({left_id}, {right_id})")
        return self.mapper.to_response(created)

    async def update(self, request: BaseModel) -> None:
        """Overwrite the metadata of an existing link. The key pair never changes.

        Raises:
            NotFoundError: If no link exists for the pair
            InternalError: If the store rejects the write
        """
        left_id, right_id = self._key_pair(request)

        link = await self.link_repo.get_link(left_id, right_id)
        if link is None:
            logger.warning(f"[{self.relation.name}] no link ({left_id}, {right_id}) to update")
            raise NotFoundError(self.messages.update_not_found)

        self.mapper.apply(request, link)

        if not await self.link_repo.update(link):
            raise InternalError(self.messages.update_failed)
        logger.info(f"[{self.relation.name}] updated link ({left_id}, {right_id})")

    async def remove(self, left_id: int, right_id: int) -> None:
        """Delete the link for the pair.

        Raises:
            NotFoundError: If no link exists for the pair
        """
        if not await self.link_repo.link_exists(left_id, right_id):
            logger.warning(f"[{self.relation.name}] no link ({left_id}, {right_id}) to remove")
            raise NotFoundError(self.messages.remove_not_found)

        if not await self.link_repo.remove_link(left_id, right_id):
            raise NotFoundError(self.messages.remove_not_found)
        logger.info(f"[{self.relation.name}] removed link ({left_id}, {right_id})")
