from __future__ import annotations

import uuid
from dataclasses import dataclass

PLACEHOLDER_EMAIL_DOMAIN = "athlete.invalid"


@dataclass(frozen=True)
class Identifier:
    """
    Immutable, string-backed primary key of a persisted object.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Identifier value must be a non-empty string")

    @classmethod
    def generate(cls) -> "Identifier":
        return cls(str(uuid.uuid4()))

    @classmethod
    def parse(cls, value: "str | Identifier") -> "Identifier":
        if isinstance(value, Identifier):
            return value
        return cls(value)

    def __str__(self) -> str:
        return self.value


def generate_email_address() -> str:
    # Placeholder until the user enters a real address; unique like any token.
    return f"{uuid.uuid4().hex}@{PLACEHOLDER_EMAIL_DOMAIN}"
