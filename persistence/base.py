from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import DeserializationTypeMismatch
from .identifier import Identifier
from .mapper import DocumentMapper

T = TypeVar("T", bound="PersistentObject")


class PersistentObject(ABC):
    """
    Base class of every object the datastore persists.

    Subclasses declare `document_model`, a strict pydantic model describing the
    stored document, and implement:

      - write(mapper): one key per persisted attribute, "identifier" included.
      - apply_document(mapper, doc): copy every field from the validated model.

    read(mapper, document) validates the whole document before any field is
    assigned; a None document leaves the object untouched.

    Two objects are equal when they have the same concrete type and identifier.
    Subclasses may add conditions to equality but must keep these.
    """

    document_model: ClassVar[type[BaseModel]]

    def __init__(self, identifier: Identifier | None = None):
        self._identifier = identifier if identifier is not None else Identifier.generate()
        self._detached = False

    @property
    def identifier(self) -> Identifier:
        return self._identifier

    @property
    def is_detached(self) -> bool:
        """True once the object has been deleted from a datastore."""
        return self._detached

    def mark_detached(self) -> None:
        self._detached = True

    @abstractmethod
    def write(self, mapper: DocumentMapper) -> dict[str, Any]:
        ...

    @abstractmethod
    def apply_document(self, mapper: DocumentMapper, doc: Any) -> None:
        ...

    def read(self, mapper: DocumentMapper, document: Mapping[str, Any] | None) -> None:
        if document is None:
            return
        self.apply_document(mapper, self.validate_document(document))

    @classmethod
    def from_document(cls: type[T], mapper: DocumentMapper, document: Mapping[str, Any]) -> T:
        """
        Build a fully populated instance from a stored document.

        Subclasses must accept `identifier` as a keyword argument of __init__.
        """
        parsed = cls.validate_document(document)
        obj = cls(identifier=Identifier.parse(parsed.identifier))  # type: ignore[call-arg]
        obj.apply_document(mapper, parsed)
        return obj

    @classmethod
    def validate_document(cls, document: Mapping[str, Any]) -> Any:
        if not isinstance(document, Mapping):
            raise DeserializationTypeMismatch(cls, ["<document>"])
        try:
            return cls.document_model.model_validate(dict(document))
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) if err["loc"] else "<document>" for err in e.errors()})
            raise DeserializationTypeMismatch(cls, fields) from e

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return False
        return self._identifier == other._identifier  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__qualname__, self._identifier))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(identifier={self._identifier.value!r})"
