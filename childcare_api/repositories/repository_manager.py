"""
Repository manager that provides access to all async repositories.

This is a simple container that holds references to all async repositories,
providing a unified interface for the application to access database operations.
"""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .async_base_repository import AsyncBaseRepository
from .async_link_repository import AsyncLinkRepository
from .async_child_repository import AsyncChildRepository
from .async_guardian_repository import AsyncGuardianRepository
from .async_authorized_person_repository import AsyncAuthorizedPersonRepository
from ..models import (
    FinancialInformation,
    PersonalSituation,
    AdditionalData,
    GuardianChild,
    AuthorizedPersonChild,
)

logger = logging.getLogger(__name__)


class RepositoryManager:
    """
    Repository manager that coordinates access to all async repositories.

    Services receive the repositories they need from here
    (e.g., store.child_repo, store.guardian_child_repo).
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        """
        Initialize the repository manager with all async repositories.

        Args:
            session_factory: Session factory shared by every repository. If None,
                the application-wide factory is used lazily.
        """
        logger.info("Initializing async repositories...")
        self.child_repo = AsyncChildRepository(session_factory=session_factory)
        self.guardian_repo = AsyncGuardianRepository(session_factory=session_factory)
        self.authorized_person_repo = AsyncAuthorizedPersonRepository(session_factory=session_factory)
        self.financial_information_repo = AsyncBaseRepository(FinancialInformation, session_factory)
        self.personal_situation_repo = AsyncBaseRepository(PersonalSituation, session_factory)
        self.additional_data_repo = AsyncBaseRepository(AdditionalData, session_factory)
        self.guardian_child_repo = AsyncLinkRepository(
            GuardianChild, left_key="child_id", right_key="guardian_id", session_factory=session_factory
        )
        self.authorized_person_child_repo = AsyncLinkRepository(
            AuthorizedPersonChild, left_key="child_id", right_key="authorized_person_id", session_factory=session_factory
        )
        logger.info("All async repositories initialized successfully")
