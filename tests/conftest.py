import itertools

import pytest
from fastapi.testclient import TestClient

from childcare_api.app import create_app
from childcare_api.models import (
    Child,
    Guardian,
    AuthorizedPerson,
    FinancialInformation,
    PersonalSituation,
    AdditionalData,
    GuardianChild,
    AuthorizedPersonChild,
)
from childcare_api.repositories.async_base_repository import IntegrityConstraintError
from childcare_api.services.registry import ServiceRegistry


class FakeEntityRepository:
    """In-memory stand-in for AsyncBaseRepository."""

    def __init__(self, model):
        self.model = model
        self.rows = {}
        self._ids = itertools.count(1)
        self.fail_writes = False

    def seed(self, **values):
        entity = self.model(id=next(self._ids), **values)
        self.rows[entity.id] = entity
        return entity

    async def get_all(self):
        return [self.rows[key] for key in sorted(self.rows)]

    async def get_by_id(self, entity_id, *options):
        return self.rows.get(entity_id)

    async def exists(self, **criteria):
        return any(
            all(getattr(row, key) == value for key, value in criteria.items())
            for row in self.rows.values()
        )

    async def add(self, entity):
        if self.fail_writes:
            return None
        entity.id = next(self._ids)
        self.rows[entity.id] = entity
        return entity

    async def update(self, entity):
        if self.fail_writes or entity.id not in self.rows:
            return False
        self.rows[entity.id] = entity
        return True

    async def delete(self, entity_id):
        return self.rows.pop(entity_id, None) is not None

    def __getattr__(self, name):
        # get_with_* views: relations are plain attributes in memory
        if name.startswith("get_with_"):
            return self.get_by_id
        raise AttributeError(name)


class FakeLinkRepository(FakeEntityRepository):
    """In-memory stand-in for AsyncLinkRepository, unique on the key pair."""

    def __init__(self, model, left_key, right_key):
        super().__init__(model)
        self.left_key = left_key
        self.right_key = right_key

    def _pair(self, row):
        return getattr(row, self.left_key), getattr(row, self.right_key)

    async def add(self, entity):
        if any(self._pair(row) == self._pair(entity) for row in self.rows.values()):
            raise IntegrityConstraintError("duplicate key pair")
        return await super().add(entity)

    async def list_by_left(self, left_id):
        return [row for row in await self.get_all() if self._pair(row)[0] == left_id]

    async def list_by_right(self, right_id):
        return [row for row in await self.get_all() if self._pair(row)[1] == right_id]

    async def get_link(self, left_id, right_id):
        for row in self.rows.values():
            if self._pair(row) == (left_id, right_id):
                return row
        return None

    async def link_exists(self, left_id, right_id):
        return await self.get_link(left_id, right_id) is not None

    async def remove_link(self, left_id, right_id):
        link = await self.get_link(left_id, right_id)
        if link is None:
            return False
        del self.rows[link.id]
        return True


class FakeStore:
    """Same attributes as RepositoryManager, backed by memory."""

    def __init__(self):
        self.child_repo = FakeEntityRepository(Child)
        self.guardian_repo = FakeEntityRepository(Guardian)
        self.authorized_person_repo = FakeEntityRepository(AuthorizedPerson)
        self.financial_information_repo = FakeEntityRepository(FinancialInformation)
        self.personal_situation_repo = FakeEntityRepository(PersonalSituation)
        self.additional_data_repo = FakeEntityRepository(AdditionalData)
        self.guardian_child_repo = FakeLinkRepository(GuardianChild, "child_id", "guardian_id")
        self.authorized_person_child_repo = FakeLinkRepository(AuthorizedPersonChild, "child_id", "authorized_person_id")


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def services(store):
    return ServiceRegistry(store)


@pytest.fixture
def client(services):
    app = create_app(services=services, init_database=False)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def alice(store):
    return store.child_repo.seed(gender="F", first_name="Alice", last_name="Martin")


@pytest.fixture
def bob(store):
    return store.guardian_repo.seed(title="M.", first_name="Bob", last_name="Martin")


@pytest.fixture
def carol(store):
    return store.authorized_person_repo.seed(first_name="Carol", last_name="Durand", phone="0600000000")
