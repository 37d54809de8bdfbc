from __future__ import annotations

from typing import Any


class PersistenceError(Exception):
    """Base class for all errors raised by the persistence layer."""


class UnknownEntityType(PersistenceError):
    def __init__(self, entity_type: type):
        super().__init__(f"{entity_type.__name__} is not registered with the datastore")
        self.entity_type = entity_type


class ConstraintViolation(PersistenceError):
    """
    A unique index (or the primary key) already holds the value in another record.
    """

    def __init__(self, entity_type: type, field: str, value: Any):
        super().__init__(f"{entity_type.__name__}.{field} must be unique; {value!r} is already stored")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class NotFound(PersistenceError):
    def __init__(self, entity_type: type, identifier: Any):
        super().__init__(f"No {entity_type.__name__} stored with identifier {identifier}")
        self.entity_type = entity_type
        self.identifier = identifier


class DeserializationTypeMismatch(PersistenceError):
    """
    A stored document does not match the field types the entity expects.
    The originating pydantic ValidationError is chained as __cause__.
    """

    def __init__(self, entity_type: type, fields: list[str]):
        super().__init__(f"Cannot read {entity_type.__name__}: invalid or missing field(s) {', '.join(fields)}")
        self.entity_type = entity_type
        self.fields = fields


class ValidationRejected(PersistenceError):
    def __init__(self, field: str, value: Any):
        super().__init__(f"{value!r} is not a valid value for {field}")
        self.field = field
        self.value = value


class CorruptCollection(PersistenceError):
    def __init__(self, location: str):
        super().__init__(f"Collection at {location} does not contain a JSON object")
        self.location = location


class DetachedObject(PersistenceError):
    """The object was deleted from the datastore and cannot be stored again."""

    def __init__(self, entity: Any):
        super().__init__(f"{entity!r} was deleted and is detached from the datastore")
        self.entity = entity
