from __future__ import annotations

from datetime import datetime, timezone

from .identifier import Identifier


class DocumentMapper:
    """
    Converts values that have no native document representation.

    Instants are stored as epoch milliseconds (UTC) and restored as aware
    datetimes in the local zone. Identifiers are stored as their string token.
    """

    def datetime_to_document(self, value: datetime) -> int:
        if value.tzinfo is None:
            value = value.astimezone()
        return int(round(value.timestamp() * 1000))

    def datetime_from_document(self, value: int) -> datetime:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).astimezone()

    def identifier_to_document(self, value: Identifier | None) -> str | None:
        return None if value is None else value.value

    def identifier_from_document(self, value: str | None) -> Identifier | None:
        return None if value is None else Identifier.parse(value)
