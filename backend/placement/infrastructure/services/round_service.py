"""
Round Service

Creates selection rounds and seeds their candidate pool in the same unit
of work. Round 1 is seeded from the drive's registrations; round N from
the candidates SELECTED in round N-1.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from placement.domain.models import ResultStatus
from placement.domain.seeding import seed_pool
from placement.infrastructure.db.models.selection_round import (
    RoundResultCreate,
    SelectionRound,
    SelectionRoundCreate,
)
from placement.infrastructure.db.repositories.drive_repository import DriveRepository
from placement.infrastructure.db.repositories.registration_repository import (
    DriveRegistrationRepository,
)
from placement.infrastructure.db.repositories.round_repository import (
    RoundResultRepository,
    SelectionRoundRepository,
)
from placement.infrastructure.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)


logger = logging.getLogger(__name__)


@dataclass
class RoundCreation:
    """A newly created round and the number of PENDING results seeded into it."""
    round: SelectionRound
    seeded_count: int


class RoundService:
    """Service for creating selection rounds."""

    def __init__(self, session: AsyncSession):
        self._drive_repo = DriveRepository(session)
        self._registration_repo = DriveRegistrationRepository(session)
        self._round_repo = SelectionRoundRepository(session)
        self._result_repo = RoundResultRepository(session)

    async def create_round(
        self,
        drive_id: UUID,
        round_number: int,
        name: str,
        scheduled_at: datetime,
        notes: Optional[str] = None,
    ) -> RoundCreation:
        """
        Create round `round_number` of a drive and seed its PENDING results.

        A missing round N-1 is not an error: the new round starts empty.

        Raises:
            InvalidArgumentError: round_number is below 1
            NotFoundError: the drive does not exist
            ConflictError: the drive already has a round with this number
        """
        if round_number < 1:
            raise InvalidArgumentError(
                f"Round number must be at least 1, got {round_number}",
                {"round_number": round_number},
            )

        if not await self._drive_repo.exists(drive_id):
            raise NotFoundError(
                f"Drive {drive_id} not found",
                operation="select",
                table="drives",
            )

        if await self._round_repo.get_by_drive_and_number(drive_id, round_number):
            raise ConflictError(
                f"Round {round_number} already exists for this drive",
                operation="insert",
                table="selection_rounds",
            )

        new_round = await self._round_repo.create(
            SelectionRoundCreate(
                drive_id=drive_id,
                round_number=round_number,
                name=name,
                scheduled_at=scheduled_at,
                notes=notes,
            )
        )

        pool = await self._compute_pool(drive_id, round_number)
        await self._result_repo.create_many([
            RoundResultCreate(
                round_id=new_round.id,
                candidate_id=candidate_id,
                status=ResultStatus.PENDING,
            )
            for candidate_id in pool
        ])

        logger.info(
            f"[ROUNDS] Created round {round_number} '{name}' for drive {drive_id}, "
            f"seeded {len(pool)} candidates"
        )
        return RoundCreation(round=new_round, seeded_count=len(pool))

    async def _compute_pool(self, drive_id: UUID, round_number: int):
        if round_number == 1:
            registered = await self._registration_repo.candidate_ids_for_drive(drive_id)
            return seed_pool(1, registered)

        previous_round = await self._round_repo.get_by_drive_and_number(
            drive_id, round_number - 1
        )
        if previous_round is None:
            logger.warning(
                f"[ROUNDS] Round {round_number - 1} missing for drive {drive_id}; "
                f"round {round_number} starts empty"
            )
            return seed_pool(round_number, [], None)

        previous_results = await self._result_repo.list_by_round(previous_round.id)
        return seed_pool(
            round_number,
            [],
            [(result.candidate_id, result.status) for result in previous_results],
        )
