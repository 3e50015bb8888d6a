"""Request/response models for the association links.

Create, update and response share one shape per link kind: the key pair plus
the relationship metadata.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Guardian / Child ---

class LinkGuardianChildBase(BaseModel):
    guardian_id: int
    child_id: int
    relationship: Optional[str] = Field(default=None, max_length=50)


class LinkGuardianChildCreate(LinkGuardianChildBase):
    pass


class LinkGuardianChildUpdate(LinkGuardianChildBase):
    pass


class LinkGuardianChildResponse(LinkGuardianChildBase):
    model_config = ConfigDict(from_attributes=True)


# --- Authorized person / Child ---

class LinkAuthorizedPersonChildBase(BaseModel):
    authorized_person_id: int
    child_id: int
    relationship: Optional[str] = Field(default=None, max_length=50)
    emergency_contact: bool = False
    comment: Optional[str] = None


class LinkAuthorizedPersonChildCreate(LinkAuthorizedPersonChildBase):
    pass


class LinkAuthorizedPersonChildUpdate(LinkAuthorizedPersonChildBase):
    pass


class LinkAuthorizedPersonChildResponse(LinkAuthorizedPersonChildBase):
    model_config = ConfigDict(from_attributes=True)
