from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, TypeVar

from .base import PersistentObject
from .delegate import DatastoreDelegate
from .errors import ConstraintViolation, DetachedObject, NotFound, UnknownEntityType
from .identifier import Identifier
from .interfaces import CollectionProvider, KeyValueDocumentStore
from .mapper import DocumentMapper

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=PersistentObject)

IDENTIFIER_KEY = "identifier"


@dataclass(frozen=True)
class EntityRegistration:
    entity_type: type[PersistentObject]
    collection: str
    unique_fields: tuple[str, ...]


class Datastore:
    """
    CRUD for persistent objects on top of a document storage engine.

    Every entity type is registered once at startup with its collection name and
    the document fields that must be unique across the collection. Successful
    save/update/delete calls notify the registered delegates, in registration
    order, on the calling thread.

    The datastore does no locking of its own: callers serialize access to one
    instance. Engine errors propagate unchanged.
    """

    def __init__(
        self,
        engine: CollectionProvider,
        *,
        mapper: DocumentMapper | None = None,
        log_documents: bool = False,
    ):
        self._engine = engine
        self._mapper = mapper or DocumentMapper()
        self._log_documents = log_documents
        self._registrations: dict[type[PersistentObject], EntityRegistration] = {}
        self._delegates: list[DatastoreDelegate] = []

    @property
    def mapper(self) -> DocumentMapper:
        return self._mapper

    # --- registration ---

    def register_entity_type(
        self,
        entity_type: type[PersistentObject],
        unique_fields: Iterable[str] = (),
        *,
        collection: str | None = None,
    ) -> EntityRegistration:
        fields = tuple(dict.fromkeys(f for f in unique_fields if f != IDENTIFIER_KEY))
        registration = EntityRegistration(
            entity_type=entity_type,
            collection=collection or entity_type.__name__.lower(),
            unique_fields=fields,
        )
        self._registrations[entity_type] = registration
        logger.debug(
            "Registered %s in collection %r (unique: %s)",
            entity_type.__name__,
            registration.collection,
            ", ".join(fields) or "-",
        )
        return registration

    def registration_for(self, entity_type: type[PersistentObject]) -> EntityRegistration:
        registration = self._registrations.get(entity_type)
        if registration is None:
            raise UnknownEntityType(entity_type)
        return registration

    def register_delegate(self, delegate: DatastoreDelegate) -> None:
        if any(d is delegate for d in self._delegates):
            return
        self._delegates.append(delegate)

    def unregister_delegate(self, delegate: DatastoreDelegate) -> None:
        self._delegates = [d for d in self._delegates if d is not delegate]

    # --- mutations ---

    def save(self, entity: PersistentObject) -> None:
        if entity.is_detached:
            raise DetachedObject(entity)
        registration = self.registration_for(type(entity))
        store = self._collection(registration)
        records = store.load()
        key = entity.identifier.value
        if key in records:
            raise ConstraintViolation(registration.entity_type, IDENTIFIER_KEY, key)

        document = self._write(entity)
        self._check_unique(registration, records, document, exclude=None)
        records[key] = document
        store.save(records)

        logger.debug("Added %r to %s", entity, registration.collection)
        self._notify(lambda d: d.did_object_added(entity))

    def update(self, entity: PersistentObject) -> None:
        if entity.is_detached:
            raise DetachedObject(entity)
        registration = self.registration_for(type(entity))
        store = self._collection(registration)
        records = store.load()
        key = entity.identifier.value
        if key not in records:
            raise NotFound(registration.entity_type, entity.identifier)

        document = self._write(entity)
        self._check_unique(registration, records, document, exclude=key)
        records[key] = document
        store.save(records)

        logger.debug("Updated %r in %s", entity, registration.collection)
        self._notify(lambda d: d.did_object_updated(entity))

    def delete(self, entity: PersistentObject) -> None:
        registration = self.registration_for(type(entity))
        store = self._collection(registration)
        records = store.load()
        key = entity.identifier.value
        if records.pop(key, None) is None:
            raise NotFound(registration.entity_type, entity.identifier)
        store.save(records)
        entity.mark_detached()

        logger.debug("Removed %r from %s", entity, registration.collection)
        self._notify(lambda d: d.did_object_removed(entity))

    # --- queries ---

    def find_by_identifier(self, entity_type: type[T], identifier: Identifier | str) -> T | None:
        registration = self.registration_for(entity_type)
        document = self._collection(registration).load().get(Identifier.parse(identifier).value)
        if document is None:
            return None
        return entity_type.from_document(self._mapper, document)

    def find_all(self, entity_type: type[T]) -> list[T]:
        registration = self.registration_for(entity_type)
        records = self._collection(registration).load()
        return [entity_type.from_document(self._mapper, doc) for doc in records.values()]

    def contains(self, entity: PersistentObject) -> bool:
        registration = self.registration_for(type(entity))
        return entity.identifier.value in self._collection(registration).load()

    def resolve(self, entity_type: type[T], identifier: Identifier | None) -> T | None:
        """
        Follow a weak reference. Unset and dangling references both give None.
        """
        if identifier is None:
            return None
        return self.find_by_identifier(entity_type, identifier)

    # --- internals ---

    def _collection(self, registration: EntityRegistration) -> KeyValueDocumentStore:
        return self._engine.open_collection(registration.collection)

    def _write(self, entity: PersistentObject) -> dict[str, Any]:
        document = entity.write(self._mapper)
        document[IDENTIFIER_KEY] = entity.identifier.value
        if self._log_documents:
            logger.debug("Document for %r: %s", entity, document)
        return document

    def _check_unique(
        self,
        registration: EntityRegistration,
        records: dict[str, Any],
        document: dict[str, Any],
        *,
        exclude: str | None,
    ) -> None:
        # None is not indexed: any number of records may leave a unique field unset.
        for field in registration.unique_fields:
            value = document.get(field)
            if value is None:
                continue
            for key, other in records.items():
                if key == exclude or not isinstance(other, dict):
                    continue
                if other.get(field) == value:
                    raise ConstraintViolation(registration.entity_type, field, value)

    def _notify(self, hook: Callable[[DatastoreDelegate], None]) -> None:
        for delegate in list(self._delegates):
            hook(delegate)
