from __future__ import annotations

from datetime import date as Date

# Gender codes accepted by User.gender. 0 means "not specified".
GENDER_VALUES: dict[int, str] = {
    0: "not specified",
    1: "male",
    2: "female",
    3: "diverse",
}

TRAINING_LEVELS: dict[int, str] = {
    0: "beginner",
    1: "intermediate",
    2: "advanced",
}

# Age-predicted maximum heart rate: 220 - age, 226 - age for women.
_MAX_PULSE_BASE = {2: 226}
_DEFAULT_MAX_PULSE_BASE = 220


def is_valid_gender(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in GENDER_VALUES


def age_on(birthday: Date, today: Date) -> int:
    years = today.year - birthday.year
    if (today.month, today.day) < (birthday.month, birthday.day):
        years -= 1
    return max(years, 0)


def estimate_max_pulse(birthday: Date, gender: int, today: Date | None = None) -> int:
    today = today or Date.today()
    base = _MAX_PULSE_BASE.get(gender, _DEFAULT_MAX_PULSE_BASE)
    return base - age_on(birthday, today)
