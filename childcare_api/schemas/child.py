from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChildBase(BaseModel):
    gender: str = ""
    last_name: Optional[str] = Field(default=None, max_length=100)
    first_name: Optional[str] = Field(default=None, max_length=100)
    birth_date: Optional[date] = None
    has_siblings: Optional[bool] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    birth_city: Optional[str] = None


class ChildCreate(ChildBase):
    pass


class ChildUpdate(ChildBase):
    id: int


class ChildResponse(ChildBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class ChildWithGuardiansResponse(ChildResponse):
    guardians: List["GuardianResponse"] = []


class ChildWithAuthorizedPeopleResponse(ChildResponse):
    authorized_people: List["AuthorizedPersonResponse"] = []


class ChildWithAdditionalDataResponse(ChildResponse):
    additional_data: List["AdditionalDataResponse"] = []


from .guardian import GuardianResponse  # noqa: E402
from .authorized_person import AuthorizedPersonResponse  # noqa: E402
from .records import AdditionalDataResponse  # noqa: E402

ChildWithGuardiansResponse.model_rebuild()
ChildWithAuthorizedPeopleResponse.model_rebuild()
ChildWithAdditionalDataResponse.model_rebuild()
