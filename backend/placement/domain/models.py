"""
Domain Models for the Placement Tracker

Enumerations shared by the domain, persistence and API layers.
No framework dependencies.
"""

from enum import Enum
from typing import Union


class DriveStatus(str, Enum):
    """Lifecycle of a company drive."""
    UPCOMING = "UPCOMING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


class ResultStatus(str, Enum):
    """Outcome of one candidate in one selection round."""
    PENDING = "PENDING"
    SELECTED = "SELECTED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        """SELECTED and REJECTED end a candidate's round."""
        return self is not ResultStatus.PENDING

    @classmethod
    def parse(cls, value: Union["ResultStatus", str]) -> "ResultStatus":
        """
        Parse a status from an enum member or a case-insensitive string.

        Raises:
            ValueError: if the value is not a known status
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        allowed = ", ".join(s.value for s in cls)
        raise ValueError(f"Invalid result status {value!r}; expected one of {allowed}")


class UserRole(str, Enum):
    """Roles carried by the identity service's tokens."""
    STUDENT = "STUDENT"
    ADMIN = "ADMIN"
