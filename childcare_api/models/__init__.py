"""
SQLAlchemy ORM models for the database tables.
"""

from .orm_models import (
    Base,
    Child,
    Guardian,
    AuthorizedPerson,
    FinancialInformation,
    PersonalSituation,
    AdditionalData,
    GuardianChild,
    AuthorizedPersonChild,
)
