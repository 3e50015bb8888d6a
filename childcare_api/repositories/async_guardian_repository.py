"""Async Guardian repository with the guardian-centred eager-loaded views."""

from typing import Optional

from sqlalchemy.orm import selectinload

from .async_base_repository import AsyncBaseRepository
from ..models import Guardian, GuardianChild


class AsyncGuardianRepository(AsyncBaseRepository[Guardian]):
    """Async repository for guardians."""

    model = Guardian

    async def get_with_children(self, guardian_id: int) -> Optional[Guardian]:
        return await self.get_by_id(
            guardian_id,
            selectinload(Guardian.guardian_children).selectinload(GuardianChild.child),
        )

    async def get_with_financial_information(self, guardian_id: int) -> Optional[Guardian]:
        return await self.get_by_id(guardian_id, selectinload(Guardian.financial_information))

    async def get_with_personal_situation(self, guardian_id: int) -> Optional[Guardian]:
        return await self.get_by_id(guardian_id, selectinload(Guardian.personal_situation))
