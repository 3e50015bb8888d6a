from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GuardianBase(BaseModel):
    title: str = ""
    last_name: Optional[str] = Field(default=None, max_length=100)
    birth_name: Optional[str] = Field(default=None, max_length=100)
    first_name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None
    phone2: Optional[str] = None
    beneficiary_number: Optional[str] = None


class GuardianCreate(GuardianBase):
    pass


class GuardianUpdate(GuardianBase):
    id: int


class GuardianResponse(GuardianBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


class GuardianWithChildrenResponse(GuardianResponse):
    children: List["ChildResponse"] = []


class GuardianWithFinancialInformationResponse(GuardianResponse):
    financial_information: Optional["FinancialInformationResponse"] = None


class GuardianWithPersonalSituationResponse(GuardianResponse):
    personal_situation: Optional["PersonalSituationResponse"] = None


from .child import ChildResponse  # noqa: E402
from .records import FinancialInformationResponse, PersonalSituationResponse  # noqa: E402

GuardianWithChildrenResponse.model_rebuild()
GuardianWithFinancialInformationResponse.model_rebuild()
GuardianWithPersonalSituationResponse.model_rebuild()
