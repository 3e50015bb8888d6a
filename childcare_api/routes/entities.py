"""CRUD routes for the base entities.

Every entity exposes the same surface; ``build_entity_router`` produces one
router per entity from its service name and models.
"""

import logging
from typing import Dict, List, Type

from fastapi import APIRouter, Depends, Path, Request, Response, status
from pydantic import BaseModel

from ..dependencies import get_services
from ..services.registry import ServiceRegistry
from ..schemas.child import ChildCreate, ChildUpdate, ChildResponse
from ..schemas.guardian import GuardianCreate, GuardianUpdate, GuardianResponse
from ..schemas.authorized_person import AuthorizedPersonCreate, AuthorizedPersonUpdate, AuthorizedPersonResponse
from ..schemas.records import (
    FinancialInformationCreate, FinancialInformationUpdate, FinancialInformationResponse,
    PersonalSituationCreate, PersonalSituationUpdate, PersonalSituationResponse,
    AdditionalDataCreate, AdditionalDataUpdate, AdditionalDataResponse,
)
from ..services import entities

logger = logging.getLogger(__name__)


def build_entity_router(
    prefix: str,
    tag: str,
    service_name: str,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    response_model: Type[BaseModel],
    views: Dict[str, Type[BaseModel]] = None,
) -> APIRouter:
    """Build the CRUD router of one entity.

    Args:
        prefix: URL prefix, e.g. "/children"
        tag: OpenAPI tag
        service_name: Attribute of the ServiceRegistry holding the entity service
        create_model: Request body of POST
        update_model: Request body of PUT (carries the id)
        response_model: Response of the read endpoints
        views: View name -> response model, served at GET /{id}/{view name}
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    get_by_id_name = f"get_{service_name}_by_id"

    @router.get("", response_model=List[response_model])
    async def list_entities(services: ServiceRegistry = Depends(get_services)):
        return await getattr(services, service_name).list_all()

    @router.get("/{entity_id}", response_model=response_model, name=get_by_id_name)
    async def get_entity(
        entity_id: int = Path(..., description="Identifier of the record"),
        services: ServiceRegistry = Depends(get_services),
    ):
        return await getattr(services, service_name).get(entity_id)

    for view_name, view_model in (views or {}).items():
        def add_view_route(view_name: str = view_name, view_model: Type[BaseModel] = view_model):
            @router.get(f"/{{entity_id}}/{view_name}", response_model=view_model,
                        name=f"get_{service_name}_{view_name.replace('-', '_')}")
            async def get_entity_view(
                entity_id: int = Path(..., description="Identifier of the record"),
                services: ServiceRegistry = Depends(get_services),
            ):
                return await getattr(services, service_name).get_with(entity_id, view_name)

        add_view_route()

    @router.post("", response_model=response_model, status_code=status.HTTP_201_CREATED)
    async def create_entity(
        payload: create_model,
        request: Request,
        response: Response,
        services: ServiceRegistry = Depends(get_services),
    ):
        created = await getattr(services, service_name).create(payload)
        response.headers["Location"] = str(request.url_for(get_by_id_name, entity_id=created.id))
        return created

    @router.put("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def update_entity(
        payload: update_model,
        entity_id: int = Path(..., description="Identifier of the record"),
        services: ServiceRegistry = Depends(get_services),
    ):
        await getattr(services, service_name).update(entity_id, payload)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{entity_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entity(
        entity_id: int = Path(..., description="Identifier of the record"),
        services: ServiceRegistry = Depends(get_services),
    ):
        await getattr(services, service_name).delete(entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


def _view_models(definition) -> Dict[str, Type[BaseModel]]:
    return {name: view.response_cls for name, view in definition.views.items()}


children_router = build_entity_router(
    "/children", "children", "children",
    ChildCreate, ChildUpdate, ChildResponse, _view_models(entities.CHILD),
)
guardians_router = build_entity_router(
    "/guardians", "guardians", "guardians",
    GuardianCreate, GuardianUpdate, GuardianResponse, _view_models(entities.GUARDIAN),
)
authorized_people_router = build_entity_router(
    "/authorized-people", "authorized-people", "authorized_people",
    AuthorizedPersonCreate, AuthorizedPersonUpdate, AuthorizedPersonResponse, _view_models(entities.AUTHORIZED_PERSON),
)
financial_informations_router = build_entity_router(
    "/financial-informations", "financial-informations", "financial_informations",
    FinancialInformationCreate, FinancialInformationUpdate, FinancialInformationResponse,
)
personal_situations_router = build_entity_router(
    "/personal-situations", "personal-situations", "personal_situations",
    PersonalSituationCreate, PersonalSituationUpdate, PersonalSituationResponse,
)
additional_data_router = build_entity_router(
    "/additional-data", "additional-data", "additional_data",
    AdditionalDataCreate, AdditionalDataUpdate, AdditionalDataResponse,
)

entity_routers = [
    children_router,
    guardians_router,
    authorized_people_router,
    financial_informations_router,
    personal_situations_router,
    additional_data_router,
]
