"""Records attached to a guardian (financial information, personal situation) or a child (additional data)."""
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Financial information ---

class FinancialInformationBase(BaseModel):
    guardian_id: int
    family_quotient: Optional[int] = Field(default=None, ge=0)
    monthly_income: Optional[Decimal] = Field(default=None, ge=0)
    annual_income: Optional[Decimal] = Field(default=None, ge=0)
    model: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode='after')
    def check_period(self) -> 'FinancialInformationBase':
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class FinancialInformationCreate(FinancialInformationBase):
    pass


class FinancialInformationUpdate(FinancialInformationBase):
    id: int


class FinancialInformationResponse(FinancialInformationBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


# --- Personal situation ---

class PersonalSituationBase(BaseModel):
    guardian_id: int
    marital_status: Optional[str] = None
    sector: Optional[str] = None
    area: Optional[str] = None
    regime: Optional[str] = None


class PersonalSituationCreate(PersonalSituationBase):
    pass


class PersonalSituationUpdate(PersonalSituationBase):
    id: int


class PersonalSituationResponse(PersonalSituationBase):
    model_config = ConfigDict(from_attributes=True)

    id: int


# --- Additional data ---

class AdditionalDataBase(BaseModel):
    child_id: int
    param_name: Optional[str] = None
    param_value: Optional[str] = None
    param_type: Optional[str] = None
    comment: Optional[str] = None


class AdditionalDataCreate(AdditionalDataBase):
    pass


class AdditionalDataUpdate(AdditionalDataBase):
    id: int


class AdditionalDataResponse(AdditionalDataBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
