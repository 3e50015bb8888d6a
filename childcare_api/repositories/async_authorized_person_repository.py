"""Async AuthorizedPerson repository."""

from typing import Optional

from sqlalchemy.orm import selectinload

from .async_base_repository import AsyncBaseRepository
from ..models import AuthorizedPerson, AuthorizedPersonChild


class AsyncAuthorizedPersonRepository(AsyncBaseRepository[AuthorizedPerson]):
    """Async repository for authorized people."""

    model = AuthorizedPerson

    async def get_with_children(self, authorized_person_id: int) -> Optional[AuthorizedPerson]:
        return await self.get_by_id(
            authorized_person_id,
            selectinload(AuthorizedPerson.authorized_person_children).selectinload(AuthorizedPersonChild.child),
        )
