from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthorizedPersonBase(BaseModel):
    last_name: Optional[str] = Field(default=None, max_length=100)
    first_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = None


class AuthorizedPersonCreate(AuthorizedPersonBase):
    pass


class AuthorizedPersonUpdate(AuthorizedPersonBase):
    id: int


class AuthorizedPersonResponse(AuthorizedPersonBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class AuthorizedPersonWithChildrenResponse(AuthorizedPersonResponse):
    children: List["ChildResponse"] = []


from .child import ChildResponse  # noqa: E402

AuthorizedPersonWithChildrenResponse.model_rebuild()
