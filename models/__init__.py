from __future__ import annotations

from .training import GENDER_VALUES, TRAINING_LEVELS
from .user import User, UserDocument

__all__ = [
    "GENDER_VALUES",
    "TRAINING_LEVELS",
    "User",
    "UserDocument",
]
