"""
Registration Service

Admits candidates into drives. A registration is written only when the
candidate exists, the drive exists and is ACTIVE, no registration exists
for the pair yet, and every eligibility rule passes.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from placement.domain.eligibility import (
    CandidateProfile,
    DriveCriteria,
    EligibilityEvaluator,
    EligibilityVerdict,
)
from placement.domain.models import DriveStatus
from placement.infrastructure.db.models.candidate import Candidate
from placement.infrastructure.db.models.drive import Drive
from placement.infrastructure.db.models.registration import (
    DriveRegistration,
    DriveRegistrationCreate,
)
from placement.infrastructure.db.repositories.candidate_repository import CandidateRepository
from placement.infrastructure.db.repositories.drive_repository import DriveRepository
from placement.infrastructure.db.repositories.registration_repository import (
    DriveRegistrationRepository,
)
from placement.infrastructure.exceptions import (
    ConflictError,
    EligibilityRejectedError,
    InvalidArgumentError,
    NotFoundError,
)


logger = logging.getLogger(__name__)


def profile_from_candidate(candidate: Candidate) -> CandidateProfile:
    """Build the eligibility profile of a stored candidate."""
    return CandidateProfile(
        branch=candidate.branch,
        grade_average=candidate.cgpa,
        percent_score_a=candidate.tenth_percent,
        percent_score_b=candidate.twelfth_percent,
        has_unresolved_backlog=candidate.has_active_backlog,
    )


def criteria_from_drive(drive: Drive) -> DriveCriteria:
    """Build the eligibility criteria of a stored drive."""
    return DriveCriteria.from_delimited(
        min_grade_average=drive.min_cgpa,
        min_percent=drive.min_percent,
        allowed_branches=drive.allowed_branches,
        status=DriveStatus(drive.status),
    )


@dataclass
class RegisteredCandidate:
    """A registration row with the candidate's display fields."""
    registration_id: UUID
    candidate_id: UUID
    name: str
    email: str
    enrollment_number: str
    branch: str
    cgpa: float
    registered_at: datetime


class RegistrationService:
    """
    Service for drive registrations.

    The eligibility evaluator is injectable for tests; by default the
    four standard rules are applied.
    """

    def __init__(
        self,
        session: AsyncSession,
        evaluator: Optional[EligibilityEvaluator] = None
    ):
        self._candidate_repo = CandidateRepository(session)
        self._drive_repo = DriveRepository(session)
        self._registration_repo = DriveRegistrationRepository(session)
        self._evaluator = evaluator or EligibilityEvaluator()

    async def _load(self, candidate_id: UUID, drive_id: UUID):
        candidate = await self._candidate_repo.get_by_id(candidate_id)
        if candidate is None:
            raise NotFoundError(
                f"Candidate {candidate_id} not found",
                operation="select",
                table="candidates",
            )
        drive = await self._drive_repo.get_by_id(drive_id)
        if drive is None:
            raise NotFoundError(
                f"Drive {drive_id} not found",
                operation="select",
                table="drives",
            )
        return candidate, drive

    async def register(self, candidate_id: UUID, drive_id: UUID) -> DriveRegistration:
        """
        Register a candidate for a drive.

        Raises:
            NotFoundError: candidate or drive does not exist
            ConflictError: the candidate is already registered for the drive
            InvalidArgumentError: the drive is not accepting registrations
            EligibilityRejectedError: one or more eligibility rules failed
        """
        candidate, drive = await self._load(candidate_id, drive_id)

        existing = await self._registration_repo.get_by_drive_and_candidate(
            drive_id, candidate_id
        )
        if existing is not None:
            raise ConflictError(
                "Candidate is already registered for this drive",
                operation="insert",
                table="drive_registrations",
            )

        criteria = criteria_from_drive(drive)
        if not criteria.accepts_registrations:
            raise InvalidArgumentError(
                f"Drive is {criteria.status.value} and not accepting registrations",
                {"drive_id": str(drive_id), "status": criteria.status.value},
            )

        verdict = self._evaluator.evaluate(profile_from_candidate(candidate), criteria)
        if not verdict.eligible:
            logger.warning(
                f"[REGISTRATION] Rejected candidate {candidate_id} for drive {drive_id}: "
                f"{'; '.join(verdict.reasons)}"
            )
            raise EligibilityRejectedError(verdict.reasons)

        registration = await self._registration_repo.create(
            DriveRegistrationCreate(
                drive_id=drive_id,
                candidate_id=candidate_id,
                is_eligible=True,
            )
        )
        logger.info(
            f"[REGISTRATION] Candidate {candidate_id} registered for "
            f"{drive.company_name} ({drive_id})"
        )
        return registration

    async def check_eligibility(
        self,
        candidate_id: UUID,
        drive_id: UUID
    ) -> EligibilityVerdict:
        """Evaluate eligibility without registering."""
        candidate, drive = await self._load(candidate_id, drive_id)
        return self._evaluator.evaluate(
            profile_from_candidate(candidate),
            criteria_from_drive(drive),
        )

    async def list_registrations(self, drive_id: UUID) -> List[RegisteredCandidate]:
        """Candidates registered for a drive, newest registration first."""
        if not await self._drive_repo.exists(drive_id):
            raise NotFoundError(
                f"Drive {drive_id} not found",
                operation="select",
                table="drives",
            )

        rows = await self._registration_repo.list_with_candidates(drive_id)
        return [
            RegisteredCandidate(
                registration_id=registration.id,
                candidate_id=candidate.id,
                name=candidate.full_name,
                email=candidate.email,
                enrollment_number=candidate.enrollment_number,
                branch=candidate.branch,
                cgpa=candidate.cgpa,
                registered_at=registration.registered_at,
            )
            for registration, candidate in rows
        ]
