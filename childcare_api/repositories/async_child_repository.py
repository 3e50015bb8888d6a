"""Async Child repository with the child-centred eager-loaded views."""

from typing import Optional

from sqlalchemy.orm import selectinload

from .async_base_repository import AsyncBaseRepository
from ..models import Child, GuardianChild, AuthorizedPersonChild


class AsyncChildRepository(AsyncBaseRepository[Child]):
    """Async repository for children."""

    model = Child

    async def get_with_guardians(self, child_id: int) -> Optional[Child]:
        return await self.get_by_id(
            child_id,
            selectinload(Child.guardian_children).selectinload(GuardianChild.guardian),
        )

    async def get_with_authorized_people(self, child_id: int) -> Optional[Child]:
        return await self.get_by_id(
            child_id,
            selectinload(Child.authorized_person_children).selectinload(AuthorizedPersonChild.authorized_person),
        )

    async def get_with_additional_data(self, child_id: int) -> Optional[Child]:
        return await self.get_by_id(child_id, selectinload(Child.additional_data))
