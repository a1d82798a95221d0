"""
SQLModel ORM Models for the Placement Tracker

Exports all database models for Alembic and application use.
Import models here to register them with SQLModel.metadata.
"""

from placement.infrastructure.db.models.base import (
    TimestampMixin,
    UUIDMixin,
    utcnow,
)
from placement.infrastructure.db.models.candidate import (
    Candidate,
    CandidateBase,
    CandidateCreate,
)
from placement.infrastructure.db.models.drive import (
    Drive,
    DriveBase,
    DriveCreate,
)
from placement.infrastructure.db.models.registration import (
    DriveRegistration,
    DriveRegistrationCreate,
)
from placement.infrastructure.db.models.selection_round import (
    SelectionRound,
    SelectionRoundBase,
    SelectionRoundCreate,
    RoundResult,
    RoundResultBase,
    RoundResultCreate,
)


__all__ = [
    # Base
    "TimestampMixin",
    "UUIDMixin",
    "utcnow",
    # Candidate
    "Candidate",
    "CandidateBase",
    "CandidateCreate",
    # Drive
    "Drive",
    "DriveBase",
    "DriveCreate",
    # Registration
    "DriveRegistration",
    "DriveRegistrationCreate",
    # Rounds
    "SelectionRound",
    "SelectionRoundBase",
    "SelectionRoundCreate",
    "RoundResult",
    "RoundResultBase",
    "RoundResultCreate",
]
