from __future__ import annotations

import logging
from datetime import date as Date
from datetime import datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from persistence.base import PersistentObject
from persistence.errors import ValidationRejected
from persistence.identifier import Identifier, generate_email_address
from persistence.mapper import DocumentMapper

from .training import age_on, estimate_max_pulse, is_valid_gender

logger = logging.getLogger(__name__)


class UserDocument(BaseModel):
    """
    Stored shape of a User. Strict: a value of the wrong type is never coerced.
    """

    model_config = ConfigDict(strict=True)

    identifier: str
    firstName: str
    lastName: str
    emailAddress: str
    birthday: int
    gender: int
    trainingLevel: int
    maxPulse: int
    activeRunningPlanId: str | None

    @field_validator("gender")
    @classmethod
    def _known_gender(cls, value: int) -> int:
        if not is_valid_gender(value):
            raise ValueError(f"unknown gender code {value}")
        return value


class User(PersistentObject):
    """
    The user of the app, here the runner.

    The email address is unique across all stored users (declared when the type
    is registered with the datastore). The active running plan is a weak
    reference: the user never owns the plan, and a plan deleted elsewhere leaves
    a dangling id that readers must tolerate.
    """

    document_model = UserDocument

    def __init__(
        self,
        *,
        identifier: Identifier | None = None,
        first_name: str = "",
        last_name: str = "Athlete",
        email_address: str | None = None,
        birthday: Date | None = None,
        gender: int = 0,
        training_level: int = 0,
        max_pulse: int = 0,
        active_running_plan_id: Identifier | None = None,
    ):
        super().__init__(identifier)
        self.first_name = first_name
        self.last_name = last_name
        self.email_address = email_address if email_address is not None else generate_email_address()
        # required to calculate the heart rate
        self._birthday: datetime = datetime.now().astimezone()
        if birthday is not None:
            self.birthday = birthday
        self._gender = 0
        self.gender = gender
        self.training_level = training_level
        self.max_pulse = max_pulse
        self.active_running_plan_id = active_running_plan_id

    @property
    def birthday(self) -> Date:
        return self._birthday.astimezone().date()

    @birthday.setter
    def birthday(self, value: Date) -> None:
        # Kept as local midnight of that day.
        self._birthday = datetime.combine(value, time.min).astimezone()

    @property
    def gender(self) -> int:
        return self._gender

    @gender.setter
    def gender(self, value: int) -> None:
        # Unknown codes are ignored and the previous value kept. Existing callers
        # rely on this; new code should use set_gender_strict.
        if is_valid_gender(value):
            self._gender = value
        else:
            logger.debug("Ignoring invalid gender code %r for %r", value, self)

    def set_gender_strict(self, value: int) -> None:
        if not is_valid_gender(value):
            raise ValidationRejected("gender", value)
        self._gender = value

    def age(self, today: Date | None = None) -> int:
        return age_on(self.birthday, today or Date.today())

    def calculate_max_pulse(self, today: Date | None = None) -> int:
        self.max_pulse = estimate_max_pulse(self.birthday, self._gender, today)
        return self.max_pulse

    def write(self, mapper: DocumentMapper) -> dict[str, Any]:
        return {
            "identifier": self.identifier.value,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "emailAddress": self.email_address,
            "birthday": mapper.datetime_to_document(self._birthday),
            "gender": self._gender,
            "trainingLevel": self.training_level,
            "maxPulse": self.max_pulse,
            "activeRunningPlanId": mapper.identifier_to_document(self.active_running_plan_id),
        }

    def apply_document(self, mapper: DocumentMapper, doc: UserDocument) -> None:
        self._identifier = Identifier.parse(doc.identifier)
        self.first_name = doc.firstName
        self.last_name = doc.lastName
        self.email_address = doc.emailAddress
        self._birthday = mapper.datetime_from_document(doc.birthday)
        self._gender = doc.gender
        self.training_level = doc.trainingLevel
        self.max_pulse = doc.maxPulse
        self.active_running_plan_id = mapper.identifier_from_document(doc.activeRunningPlanId)

    def __eq__(self, other: object) -> bool:
        # same user id and same email address = same user
        if not super().__eq__(other):
            return False
        return self.email_address == other.email_address  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((super().__hash__(), self.email_address))

    def __repr__(self) -> str:
        return f"User(identifier={self.identifier.value!r}, email_address={self.email_address!r})"
