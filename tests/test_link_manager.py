from dataclasses import replace

import pytest
from unittest.mock import AsyncMock, MagicMock

from childcare_api.exceptions import ConflictError, InternalError, NotFoundError
from childcare_api.repositories.async_base_repository import IntegrityConstraintError
from childcare_api.schemas.links import (
    LinkGuardianChildCreate,
    LinkGuardianChildUpdate,
    LinkAuthorizedPersonChildCreate,
    LinkAuthorizedPersonChildUpdate,
)
from childcare_api.services.link_manager import LinkManager
from childcare_api.services.relations import GUARDIAN_CHILD, AUTHORIZED_PERSON_CHILD, LEFT_FIRST


@pytest.fixture
def guardian_links(services):
    return services.guardian_child_links


@pytest.fixture
def authorized_links(services):
    return services.authorized_person_child_links


# --- listing ---

@pytest.mark.asyncio
async def test_list_for_unknown_child_fails(guardian_links):
    """Listing by a child that was never created is NotFound."""
    with pytest.raises(NotFoundError) as exc_info:
        await guardian_links.list_for_left(999)
    assert exc_info.value.message == "L'enfant spécifié n'existe pas."


@pytest.mark.asyncio
async def test_list_for_unknown_guardian_fails(guardian_links):
    with pytest.raises(NotFoundError) as exc_info:
        await guardian_links.list_for_right(999)
    assert exc_info.value.message == "Le responsable spécifié n'existe pas."


@pytest.mark.asyncio
async def test_list_for_child_without_links_is_empty(guardian_links, alice):
    assert await guardian_links.list_for_left(alice.id) == []


@pytest.mark.asyncio
async def test_list_for_guardian_without_links_is_empty(guardian_links, bob):
    assert await guardian_links.list_for_right(bob.id) == []


@pytest.mark.asyncio
async def test_list_returns_links_of_each_side(guardian_links, store, alice, bob):
    other_child = store.child_repo.seed(gender="M", first_name="Hugo")
    await guardian_links.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=alice.id, relationship="Père"))
    await guardian_links.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=other_child.id, relationship="Père"))

    by_guardian = await guardian_links.list_for_right(bob.id)
    by_child = await guardian_links.list_for_left(alice.id)

    assert [link.child_id for link in by_guardian] == [alice.id, other_child.id]
    assert [(link.guardian_id, link.child_id) for link in by_child] == [(bob.id, alice.id)]


# --- creation ---

@pytest.mark.asyncio
async def test_create_then_link_exists(guardian_links, store, alice):
    store.guardian_repo.seed(title="Mme", first_name="Eve")
    bob = store.guardian_repo.seed(title="M.", first_name="Bob")
    assert alice.id != bob.id

    created = await guardian_links.create(
        LinkGuardianChildCreate(guardian_id=bob.id, child_id=alice.id, relationship="Parent")
    )

    assert created.relationship == "Parent"
    assert await guardian_links.link_exists(alice.id, bob.id) is True
    assert await guardian_links.link_exists(bob.id, alice.id) is False
    assert await guardian_links.link_exists(alice.id, bob.id + 1) is False
    assert await guardian_links.link_exists(alice.id + 1, bob.id) is False


@pytest.mark.asyncio
async def test_create_twice_conflicts(guardian_links, store, alice):
    """Left id=1 (Alice), Right id=2 (Bob): the second create is a Conflict."""
    store.guardian_repo.seed(title="Mme", first_name="Eve")
    bob = store.guardian_repo.seed(title="M.", first_name="Bob")
    assert (alice.id, bob.id) == (1, 2)

    request = LinkGuardianChildCreate(guardian_id=2, child_id=1, relationship="Parent")
    created = await guardian_links.create(request)
    assert created.relationship == "Parent"

    with pytest.raises(ConflictError) as exc_info:
        await guardian_links.create(request)
    assert exc_info.value.message == "Ce lien existe déjà entre ce responsable et cet enfant."
    assert len(store.guardian_child_repo.rows) == 1


@pytest.mark.asyncio
async def test_create_with_unknown_right_fails_whatever_the_left(guardian_links, alice):
    for child_id in (alice.id, 999):
        with pytest.raises(NotFoundError) as exc_info:
            await guardian_links.create(LinkGuardianChildCreate(guardian_id=999, child_id=child_id))
        assert exc_info.value.message == "Le responsable spécifié n'existe pas."


@pytest.mark.asyncio
async def test_guardian_child_unknown_child(guardian_links, bob):
    with pytest.raises(NotFoundError) as exc_info:
        await guardian_links.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=999))
    assert exc_info.value.message == "L'enfant spécifié n'existe pas."


@pytest.mark.asyncio
async def test_left_first_order_reports_left(store):
    manager = LinkManager(
        replace(GUARDIAN_CHILD, check_order=LEFT_FIRST),
        store.child_repo, store.guardian_repo, store.guardian_child_repo,
    )
    with pytest.raises(NotFoundError) as exc_info:
        await manager.create(LinkGuardianChildCreate(guardian_id=998, child_id=999))
    assert exc_info.value.message == "L'enfant spécifié n'existe pas."


def test_unknown_check_order_rejected():
    with pytest.raises(ValueError):
        replace(GUARDIAN_CHILD, check_order="both")


@pytest.mark.asyncio
async def test_authorized_person_child_checks_authorized_person_first(authorized_links):
    with pytest.raises(NotFoundError) as exc_info:
        await authorized_links.create(LinkAuthorizedPersonChildCreate(authorized_person_id=998, child_id=999))
    assert exc_info.value.message == "La personne autorisée spécifiée n'existe pas."


@pytest.mark.asyncio
async def test_authorized_person_child_unknown_child(authorized_links, carol):
    with pytest.raises(NotFoundError) as exc_info:
        await authorized_links.create(LinkAuthorizedPersonChildCreate(authorized_person_id=carol.id, child_id=999))
    assert exc_info.value.message == "L'enfant spécifié n'existe pas."


@pytest.mark.asyncio
async def test_create_authorized_person_link_keeps_metadata(authorized_links, alice, carol):
    created = await authorized_links.create(LinkAuthorizedPersonChildCreate(
        authorized_person_id=carol.id, child_id=alice.id,
        relationship="Tante", emergency_contact=True, comment="Le mercredi",
    ))

    assert created.authorized_person_id == carol.id
    assert created.child_id == alice.id
    assert created.emergency_contact is True
    assert created.comment == "Le mercredi"

    with pytest.raises(ConflictError) as exc_info:
        await authorized_links.create(LinkAuthorizedPersonChildCreate(authorized_person_id=carol.id, child_id=alice.id))
    assert exc_info.value.message == "Ce lien existe déjà entre cette personne autorisée et cet enfant."


@pytest.mark.asyncio
async def test_create_mapping_failure(store, alice, bob):
    mapper = MagicMock()
    mapper.to_record.return_value = None
    manager = LinkManager(GUARDIAN_CHILD, store.child_repo, store.guardian_repo, store.guardian_child_repo, mapper=mapper)

    with pytest.raises(InternalError) as exc_info:
        await manager.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=alice.id))
    assert exc_info.value.message == "Erreur lors de la création du lien Responsable / Enfant : Le Mapping a échoué."
    assert store.guardian_child_repo.rows == {}


@pytest.mark.asyncio
async def test_create_not_readable_after_insert(store, alice, carol):
    link_repo = MagicMock()
    link_repo.link_exists = AsyncMock(return_value=False)
    link_repo.add = AsyncMock(return_value=None)
    link_repo.get_link = AsyncMock(return_value=None)
    manager = LinkManager(AUTHORIZED_PERSON_CHILD, store.child_repo, store.authorized_person_repo, link_repo)

    with pytest.raises(InternalError) as exc_info:
        await manager.create(LinkAuthorizedPersonChildCreate(authorized_person_id=carol.id, child_id=alice.id))
    assert exc_info.value.message == "Échec de la création du lien Personne Autorisée / Enfant."
    link_repo.get_link.assert_awaited_once_with(alice.id, carol.id)


@pytest.mark.asyncio
async def test_create_losing_race_is_conflict(store, alice, bob):
    """The store's unique constraint rejects a pair inserted after the existence check."""
    link_repo = MagicMock()
    link_repo.link_exists = AsyncMock(return_value=False)
    link_repo.add = AsyncMock(side_effect=IntegrityConstraintError("uq_guardian_child"))
    link_repo.get_link = AsyncMock()
    manager = LinkManager(GUARDIAN_CHILD, store.child_repo, store.guardian_repo, link_repo)

    with pytest.raises(ConflictError) as exc_info:
        await manager.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=alice.id))
    assert exc_info.value.message == "Ce lien existe déjà entre ce responsable et cet enfant."
    link_repo.get_link.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_stops_at_first_failed_check(store):
    left_repo = MagicMock()
    left_repo.exists = AsyncMock(return_value=True)
    right_repo = MagicMock()
    right_repo.exists = AsyncMock(return_value=False)
    link_repo = MagicMock()
    link_repo.link_exists = AsyncMock()
    manager = LinkManager(GUARDIAN_CHILD, left_repo, right_repo, link_repo)

    with pytest.raises(NotFoundError):
        await manager.create(LinkGuardianChildCreate(guardian_id=1, child_id=1))
    right_repo.exists.assert_awaited_once_with(id=1)
    left_repo.exists.assert_not_awaited()
    link_repo.link_exists.assert_not_awaited()


# --- update ---

@pytest.mark.asyncio
async def test_update_missing_link_fails(guardian_links, alice, bob):
    with pytest.raises(NotFoundError) as exc_info:
        await guardian_links.update(LinkGuardianChildUpdate(guardian_id=bob.id, child_id=alice.id, relationship="Oncle"))
    assert exc_info.value.message == "Aucun lien Responsable / Enfant trouvé à mettre à jour."


@pytest.mark.asyncio
async def test_update_missing_authorized_person_link_fails(authorized_links, alice, carol):
    with pytest.raises(NotFoundError) as exc_info:
        await authorized_links.update(LinkAuthorizedPersonChildUpdate(authorized_person_id=carol.id, child_id=alice.id))
    assert exc_info.value.message == "Le lien Personne Autorisée / Enfant n'existe pas."


@pytest.mark.asyncio
async def test_update_changes_metadata_only(authorized_links, store, alice, carol):
    await authorized_links.create(LinkAuthorizedPersonChildCreate(
        authorized_person_id=carol.id, child_id=alice.id, relationship="Voisine",
    ))
    link_id = next(iter(store.authorized_person_child_repo.rows))

    await authorized_links.update(LinkAuthorizedPersonChildUpdate(
        authorized_person_id=carol.id, child_id=alice.id,
        relationship="Marraine", emergency_contact=True, comment="Appeler en premier",
    ))

    stored = store.authorized_person_child_repo.rows[link_id]
    assert (stored.id, stored.child_id, stored.authorized_person_id) == (link_id, alice.id, carol.id)
    assert stored.relationship == "Marraine"
    assert stored.emergency_contact is True
    assert stored.comment == "Appeler en premier"


@pytest.mark.asyncio
async def test_update_write_failure(guardian_links, store, alice, bob):
    await guardian_links.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=alice.id))
    store.guardian_child_repo.fail_writes = True

    with pytest.raises(InternalError) as exc_info:
        await guardian_links.update(LinkGuardianChildUpdate(guardian_id=bob.id, child_id=alice.id, relationship="Mère"))
    assert exc_info.value.message == "Échec de la mise à jour du lien Responsable / Enfant."


# --- removal ---

@pytest.mark.asyncio
async def test_remove_missing_link_fails(guardian_links, alice, bob):
    with pytest.raises(NotFoundError) as exc_info:
        await guardian_links.remove(alice.id, bob.id)
    assert exc_info.value.message == "Aucun lien Responsable / Enfant trouvé à supprimer."


@pytest.mark.asyncio
async def test_remove_then_link_no_longer_exists(authorized_links, alice, carol):
    await authorized_links.create(LinkAuthorizedPersonChildCreate(authorized_person_id=carol.id, child_id=alice.id))

    await authorized_links.remove(alice.id, carol.id)

    assert await authorized_links.link_exists(alice.id, carol.id) is False
    with pytest.raises(NotFoundError) as exc_info:
        await authorized_links.remove(alice.id, carol.id)
    assert exc_info.value.message == "Le lien Personne Autorisée / Enfant n'existe pas."


@pytest.mark.asyncio
async def test_deleting_parent_leaves_link_in_place(guardian_links, services, store, alice, bob):
    """The service layer does not cascade link deletion."""
    await guardian_links.create(LinkGuardianChildCreate(guardian_id=bob.id, child_id=alice.id))

    await services.guardians.delete(bob.id)

    assert await guardian_links.link_exists(alice.id, bob.id) is True
