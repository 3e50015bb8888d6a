"""Wires every service to its repositories."""
import logging

from ..repositories.repository_manager import RepositoryManager
from . import entities
from .entity_service import EntityService
from .link_manager import LinkManager
from .relations import GUARDIAN_CHILD, AUTHORIZED_PERSON_CHILD

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Holds one service per entity kind and one link manager per relationship kind."""

    def __init__(self, store: RepositoryManager):
        self.store = store
        self.children = EntityService(entities.CHILD, store.child_repo)
        self.guardians = EntityService(entities.GUARDIAN, store.guardian_repo)
        self.authorized_people = EntityService(entities.AUTHORIZED_PERSON, store.authorized_person_repo)
        self.financial_informations = EntityService(entities.FINANCIAL_INFORMATION, store.financial_information_repo)
        self.personal_situations = EntityService(entities.PERSONAL_SITUATION, store.personal_situation_repo)
        self.additional_data = EntityService(entities.ADDITIONAL_DATA, store.additional_data_repo)

        self.guardian_child_links = LinkManager(
            GUARDIAN_CHILD,
            left_repository=store.child_repo,
            right_repository=store.guardian_repo,
            link_repository=store.guardian_child_repo,
        )
        self.authorized_person_child_links = LinkManager(
            AUTHORIZED_PERSON_CHILD,
            left_repository=store.child_repo,
            right_repository=store.authorized_person_repo,
            link_repository=store.authorized_person_child_repo,
        )
        logger.info("Services initialized")
