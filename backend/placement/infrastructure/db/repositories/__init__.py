"""
Repository Layer for the Placement Tracker

Exports all repository classes for the service layer.
"""

from placement.infrastructure.db.repositories.base_repository import (
    BaseRepository,
    IReadRepository,
    IWriteRepository,
)
from placement.infrastructure.db.repositories.candidate_repository import (
    CandidateRepository,
)
from placement.infrastructure.db.repositories.drive_repository import (
    DriveRepository,
)
from placement.infrastructure.db.repositories.registration_repository import (
    DriveRegistrationRepository,
)
from placement.infrastructure.db.repositories.round_repository import (
    SelectionRoundRepository,
    RoundResultRepository,
)


__all__ = [
    # Base
    "BaseRepository",
    "IReadRepository",
    "IWriteRepository",
    # Repositories
    "CandidateRepository",
    "DriveRepository",
    "DriveRegistrationRepository",
    "SelectionRoundRepository",
    "RoundResultRepository",
]
