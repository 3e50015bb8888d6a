"""Routes for the child/guardian and child/authorized-person links."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from ..dependencies import get_services
from ..services.registry import ServiceRegistry
from ..schemas.links import (
    LinkGuardianChildCreate,
    LinkGuardianChildUpdate,
    LinkGuardianChildResponse,
    LinkAuthorizedPersonChildCreate,
    LinkAuthorizedPersonChildUpdate,
    LinkAuthorizedPersonChildResponse,
)

logger = logging.getLogger(__name__)

guardian_child_router = APIRouter(prefix="/link-guardian-child", tags=["links"])
authorized_person_child_router = APIRouter(prefix="/link-authorized-person-child", tags=["links"])


# --- Guardian / Child ---

@guardian_child_router.get("/child/{child_id}", response_model=List[LinkGuardianChildResponse])
async def get_guardians_of_child(
    child_id: int = Path(..., description="Child identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    return await services.guardian_child_links.list_for_left(child_id)


@guardian_child_router.get("/guardian/{guardian_id}", response_model=List[LinkGuardianChildResponse])
async def get_children_of_guardian(
    guardian_id: int = Path(..., description="Guardian identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    return await services.guardian_child_links.list_for_right(guardian_id)


@guardian_child_router.get("/guardian/{guardian_id}/child/{child_id}", response_model=bool)
async def guardian_child_link_exists(
    guardian_id: int = Path(..., description="Guardian identifier"),
    child_id: int = Path(..., description="Child identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    return await services.guardian_child_links.link_exists(child_id, guardian_id)


@guardian_child_router.post("", response_model=LinkGuardianChildResponse)
async def create_guardian_child_link(
    payload: LinkGuardianChildCreate,
    services: ServiceRegistry = Depends(get_services),
):
    return await services.guardian_child_links.create(payload)


@guardian_child_router.put("", status_code=status.HTTP_204_NO_CONTENT)
async def update_guardian_child_link(
    payload: LinkGuardianChildUpdate,
    services: ServiceRegistry = Depends(get_services),
):
    await services.guardian_child_links.update(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@guardian_child_router.delete("/guardian/{guardian_id}/child/{child_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_guardian_child_link(
    guardian_id: int = Path(..., description="Guardian identifier"),
    child_id: int = Path(..., description="Child identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    await services.guardian_child_links.remove(child_id, guardian_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Authorized person / Child ---

@authorized_person_child_router.get("/child/{child_id}", response_model=List[LinkAuthorizedPersonChildResponse])
async def get_authorized_people_of_child(
    child_id: int = Path(..., description="Child identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    return await services.authorized_person_child_links.list_for_left(child_id)


@authorized_person_child_router.get(
    "/authorized-person/{authorized_person_id}", response_model=List[LinkAuthorizedPersonChildResponse]
)
async def get_children_of_authorized_person(
    authorized_person_id: int = Path(..., description="Authorized person identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    return await services.authorized_person_child_links.list_for_right(authorized_person_id)


@authorized_person_child_router.get(
    "/authorized-person/{authorized_person_id}/child/{child_id}", response_model=bool
)
async def authorized_person_child_link_exists(
    authorized_person_id: int = Path(..., description="Authorized person identifier"),
    child_id: int = Path(..., description="Child identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    return await services.authorized_person_child_links.link_exists(child_id, authorized_person_id)


@authorized_person_child_router.post("", response_model=LinkAuthorizedPersonChildResponse)
async def create_authorized_person_child_link(
    payload: LinkAuthorizedPersonChildCreate,
    services: ServiceRegistry = Depends(get_services),
):
    return await services.authorized_person_child_links.create(payload)


@authorized_person_child_router.put("", status_code=status.HTTP_204_NO_CONTENT)
async def update_authorized_person_child_link(
    payload: LinkAuthorizedPersonChildUpdate,
    services: ServiceRegistry = Depends(get_services),
):
    await services.authorized_person_child_links.update(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@authorized_person_child_router.delete(
    "/authorized-person/{authorized_person_id}/child/{child_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_authorized_person_child_link(
    authorized_person_id: int = Path(..., description="Authorized person identifier"),
    child_id: int = Path(..., description="Child identifier"),
    services: ServiceRegistry = Depends(get_services),
):
    await services.authorized_person_child_links.remove(child_id, authorized_person_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


link_routers = [guardian_child_router, authorized_person_child_router]
