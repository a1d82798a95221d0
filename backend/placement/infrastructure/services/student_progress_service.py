"""
Student Progress Service

Read-only views of one candidate's journey through the drives they
registered for.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from placement.domain.models import DriveStatus, ResultStatus
from placement.infrastructure.db.repositories.candidate_repository import CandidateRepository
from placement.infrastructure.db.repositories.drive_repository import DriveRepository
from placement.infrastructure.db.repositories.registration_repository import (
    DriveRegistrationRepository,
)
from placement.infrastructure.db.repositories.round_repository import (
    RoundResultRepository,
    SelectionRoundRepository,
)
from placement.infrastructure.exceptions import NotFoundError


@dataclass
class RoundProgress:
    round_id: UUID
    round_number: int
    name: str
    scheduled_at: datetime
    status: Optional[ResultStatus] = None  # None: not seeded into this round


@dataclass
class Application:
    registration_id: UUID
    registered_at: datetime
    drive_id: UUID
    company_name: str
    job_role: str
    ctc: Optional[float]
    drive_status: DriveStatus
    drive_date: Optional[datetime] = None
    rounds: List[RoundProgress] = field(default_factory=list)


class StudentProgressService:
    """Per-candidate registration and round progress."""

    def __init__(self, session: AsyncSession):
        self._candidate_repo = CandidateRepository(session)
        self._drive_repo = DriveRepository(session)
        self._registration_repo = DriveRegistrationRepository(session)
        self._round_repo = SelectionRoundRepository(session)
        self._result_repo = RoundResultRepository(session)

    async def _require_candidate(self, candidate_id: UUID) -> None:
        if not await self._candidate_repo.exists(candidate_id):
            raise NotFoundError(
                f"Candidate {candidate_id} not found",
                operation="select",
                table="candidates",
            )

    async def get_stats(self, candidate_id: UUID) -> Dict[str, int]:
        """Registration count and number of rounds still awaiting a decision."""
        await self._require_candidate(candidate_id)
        return {
            "applications_count": await self._registration_repo.count_by_candidate(
                candidate_id
            ),
            "pending_rounds_count": await self._result_repo.count_by_candidate_and_status(
                candidate_id, ResultStatus.PENDING
            ),
        }

    async def get_applications(self, candidate_id: UUID) -> List[Application]:
        """Registrations newest first, each with its rounds and the candidate's status."""
        await self._require_candidate(candidate_id)

        registrations = await self._registration_repo.list_by_candidate(candidate_id)
        drive_ids = [registration.drive_id for registration in registrations]
        drives = await self._drive_repo.get_many(drive_ids)
        rounds_by_drive = await self._round_repo.list_by_drives(drive_ids)
        results = await self._result_repo.list_by_candidate(candidate_id)

        applications = []
        for registration in registrations:
            drive = drives[registration.drive_id]
            rounds = []
            for round_ in rounds_by_drive.get(drive.id, []):
                result = results.get(round_.id)
                rounds.append(
                    RoundProgress(
                        round_id=round_.id,
                        round_number=round_.round_number,
                        name=round_.name,
                        scheduled_at=round_.scheduled_at,
                        status=ResultStatus(result.status) if result else None,
                    )
                )
            applications.append(
                Application(
                    registration_id=registration.id,
                    registered_at=registration.registered_at,
                    drive_id=drive.id,
                    company_name=drive.company_name,
                    job_role=drive.job_role,
                    ctc=drive.ctc,
                    drive_status=DriveStatus(drive.status),
                    drive_date=drive.drive_date,
                    rounds=rounds,
                )
            )
        return applications
