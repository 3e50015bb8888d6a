"""
Explicit conversions between API models and ORM records.

``to_record`` follows a nullable contract: it returns None when there is
nothing to convert, and callers treat that as a mapping failure.
"""
import logging
from typing import Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class EntityMapper(Generic[RecordT, ResponseT]):
    """Maps request models onto ORM records and ORM records onto responses."""

    def __init__(self, record_cls: Type[RecordT], response_cls: Type[ResponseT],
                 immutable_fields: Iterable[str] = ("id",)):
        self.record_cls = record_cls
        self.response_cls = response_cls
        self.immutable_fields = frozenset(immutable_fields)

    def to_record(self, request: Optional[BaseModel]) -> Optional[RecordT]:
        """Build a new, unsaved ORM record from a create request."""
        if request is None:
            return None
        values = request.model_dump(exclude={"id"})
        try:
            return self.record_cls(**values)
        except TypeError as e:
            logger.error(f"Cannot map {type(request).__name__} to {self.record_cls.__name__}: {e}")
            return None

    def apply(self, request: BaseModel, record: RecordT) -> RecordT:
        """Copy the mutable fields of an update request onto an existing record."""
        for field, value in request.model_dump().items():
            if field in self.immutable_fields:
                continue
            setattr(record, field, value)
        return record

    def to_response(self, record: RecordT) -> ResponseT:
        return self.response_cls.model_validate(record)

    def to_responses(self, records: Iterable[RecordT]) -> List[ResponseT]:
        return [self.to_response(record) for record in records]
