"""
Entity Service - CRUD logic shared by every base entity.

Responsibility: existence checks, id consistency between path and body, and
the create/read-back sequence. Storage access goes through the repository.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from ..exceptions import BadRequestError, ConflictError, InternalError, NotFoundError
from ..mapping import EntityMapper
from ..repositories.async_base_repository import IntegrityConstraintError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityMessages:
    not_found: str
    mapping_failed: str
    creation_failed: str
    id_mismatch: str
    integrity_violation: str
    update_failed: str
    update_conflict: str
    delete_conflict: str


@dataclass(frozen=True)
class EntityView:
    """An entity loaded together with related records.

    ``loader`` names the repository method that eager-loads the relations.
    """
    loader: str
    response_cls: Type[BaseModel]


@dataclass(frozen=True)
class EntityDefinition:
    name: str
    record_cls: Type
    response_cls: Type[BaseModel]
    messages: EntityMessages
    views: Dict[str, EntityView] = field(default_factory=dict)


class EntityService:
    """CRUD service for one entity kind.

    Args:
        definition: Entity definition (types, messages, views)
        repository: Async repository for the entity table
        mapper: Conversions; defaults to one built from the definition
    """

    def __init__(self, definition: EntityDefinition, repository: Any,
                 mapper: Optional[EntityMapper] = None):
        self.definition = definition
        self.messages = definition.messages
        self.repo = repository
        self.mapper = mapper or EntityMapper(definition.record_cls, definition.response_cls)

    async def _get_or_raise(self, entity_id: int):
        entity = await self.repo.get_by_id(entity_id)
        if entity is None:
            logger.warning(f"{self.definition.name} {entity_id} not found")
            raise NotFoundError(self.messages.not_found)
        return entity

    async def list_all(self) -> List[BaseModel]:
        entities = await self.repo.get_all()
        return self.mapper.to_responses(entities or [])

    async def get(self, entity_id: int) -> BaseModel:
        entity = await self._get_or_raise(entity_id)
        return self.mapper.to_response(entity)

    async def get_with(self, entity_id: int, view_name: str) -> BaseModel:
        """Return the entity with one of its related collections/records.

        Raises:
            KeyError: If the view is not defined for this entity
            NotFoundError: If the entity does not exist
        """
        view = self.definition.views[view_name]
        entity = await getattr(self.repo, view.loader)(entity_id)
        if entity is None:
            logger.warning(f"{self.definition.name} {entity_id} not found ({view_name})")
            raise NotFoundError(self.messages.not_found)
        return view.response_cls.model_validate(entity)

    async def create(self, request: BaseModel) -> BaseModel:
        """Create the entity and return it as read back from the store.

        Raises:
            InternalError: If mapping fails or the entity cannot be read back
            ConflictError: If the store rejects the row on an integrity constraint
        """
        entity = self.mapper.to_record(request)
        if entity is None:
            logger.error(f"Mapping failed while creating {self.definition.name}")
            raise InternalError(self.messages.mapping_failed)

        try:
            added = await self.repo.add(entity)
        except IntegrityConstraintError as e:
            raise ConflictError(self.messages.integrity_violation) from e

        created = await self.repo.get_by_id(added.id) if added is not None else None
        if created is None:
            logger.error(f"{self.definition.name} not found after insert")
            raise InternalError(self.messages.creation_failed)

        logger.info(f"Created {self.definition.name} {created.id}")
        return self.mapper.to_response(created)

    async def update(self, entity_id: int, request: BaseModel) -> None:
        """Overwrite the entity's fields.

        Raises:
            BadRequestError: If the path id and the body id differ
            NotFoundError: If the entity does not exist
            ConflictError: If the new values collide with another record
            InternalError: If the store rejects the write
        """
        if entity_id != request.id:
            raise BadRequestError(self.messages.id_mismatch)

        entity = await self._get_or_raise(entity_id)
        self.mapper.apply(request, entity)

        try:
            updated = await self.repo.update(entity)
        except IntegrityConstraintError as e:
            raise ConflictError(self.messages.update_conflict) from e
        if not updated:
            raise InternalError(self.messages.update_failed)
        logger.info(f"Updated {self.definition.name} {entity_id}")

    async def delete(self, entity_id: int) -> None:
        """Delete the entity. Records referencing it are left alone.

        Raises:
            NotFoundError: If the entity does not exist
            ConflictError: If the store refuses because other records still reference it
        """
        await self._get_or_raise(entity_id)
        try:
            deleted = await self.repo.delete(entity_id)
        except IntegrityConstraintError as e:
            raise ConflictError(self.messages.delete_conflict) from e
        if not deleted:
            raise NotFoundError(self.messages.not_found)
        logger.info(f"Deleted {self.definition.name} {entity_id}")
