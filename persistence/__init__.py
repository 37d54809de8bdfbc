from __future__ import annotations

from .base import PersistentObject
from .datastore import Datastore, EntityRegistration
from .delegate import DatastoreDelegate
from .disk_store import DiskJsonCollections, DiskJsonDocumentStore
from .errors import (
    ConstraintViolation,
    CorruptCollection,
    DeserializationTypeMismatch,
    DetachedObject,
    NotFound,
    PersistenceError,
    UnknownEntityType,
    ValidationRejected,
)
from .identifier import Identifier, generate_email_address
from .interfaces import CollectionProvider, KeyValueDocumentStore
from .mapper import DocumentMapper
from .memory_store import InMemoryCollections, InMemoryDocumentStore

__all__ = [
    "PersistentObject",
    "Datastore",
    "EntityRegistration",
    "DatastoreDelegate",
    "DiskJsonCollections",
    "DiskJsonDocumentStore",
    "InMemoryCollections",
    "InMemoryDocumentStore",
    "CollectionProvider",
    "KeyValueDocumentStore",
    "DocumentMapper",
    "Identifier",
    "generate_email_address",
    "PersistenceError",
    "ConstraintViolation",
    "CorruptCollection",
    "DeserializationTypeMismatch",
    "DetachedObject",
    "NotFound",
    "UnknownEntityType",
    "ValidationRejected",
]
