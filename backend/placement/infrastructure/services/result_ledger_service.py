"""
Result Ledger Service

Records administrative decisions on round results and lists each drive's
rounds with their candidates.

Results are upserted by (round_id, candidate_id), so repeating a decision
is idempotent and the last writer wins. Changing a result never touches
later rounds: they were seeded when they were created.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from placement.domain.models import ResultStatus
from placement.infrastructure.db.models.selection_round import (
    RoundResult,
    RoundResultCreate,
)
from placement.infrastructure.db.repositories.candidate_repository import CandidateRepository
from placement.infrastructure.db.repositories.drive_repository import DriveRepository
from placement.infrastructure.db.repositories.round_repository import (
    RoundResultRepository,
    SelectionRoundRepository,
)
from placement.infrastructure.exceptions import InvalidArgumentError, NotFoundError


logger = logging.getLogger(__name__)


@dataclass
class ResultUpdate:
    """One decision in a bulk update."""
    candidate_id: UUID
    status: Union[ResultStatus, str]
    feedback: Optional[str] = None


@dataclass
class RoundCandidateView:
    """A candidate's standing in one round."""
    result_id: UUID
    candidate_id: UUID
    name: str
    email: str
    branch: str
    status: ResultStatus
    feedback: Optional[str]
    updated_at: datetime


@dataclass
class RoundView:
    """A round with every candidate seeded into it."""
    id: UUID
    drive_id: UUID
    round_number: int
    name: str
    scheduled_at: datetime
    notes: Optional[str] = None
    candidates: List[RoundCandidateView] = field(default_factory=list)


def _parse_status(value: Union[ResultStatus, str]) -> ResultStatus:
    try:
        return ResultStatus.parse(value)
    except ValueError as e:
        raise InvalidArgumentError(str(e), {"status": str(value)}, e) from e


class ResultLedgerService:
    """Service for round results."""

    def __init__(self, session: AsyncSession):
        self._candidate_repo = CandidateRepository(session)
        self._drive_repo = DriveRepository(session)
        self._round_repo = SelectionRoundRepository(session)
        self._result_repo = RoundResultRepository(session)

    async def _require_round(self, round_id: UUID) -> None:
        if not await self._round_repo.exists(round_id):
            raise NotFoundError(
                f"Round {round_id} not found",
                operation="select",
                table="selection_rounds",
            )

    async def _require_candidates(self, candidate_ids: Iterable[UUID]) -> None:
        for candidate_id in candidate_ids:
            if not await self._candidate_repo.exists(candidate_id):
                raise NotFoundError(
                    f"Candidate {candidate_id} not found",
                    operation="select",
                    table="candidates",
                )

    async def set_result(
        self,
        round_id: UUID,
        candidate_id: UUID,
        status: Union[ResultStatus, str],
        feedback: Optional[str] = None,
    ) -> RoundResult:
        """
        Mark a candidate's result in a round.

        Creates the result row when the candidate was never seeded.
        SELECTED and REJECTED results may be re-marked.

        Raises:
            InvalidArgumentError: status is not PENDING, SELECTED or REJECTED
            NotFoundError: round or candidate does not exist
        """
        parsed = _parse_status(status)
        await self._require_round(round_id)
        await self._require_candidates([candidate_id])

        result = await self._result_repo.upsert(
            RoundResultCreate(
                round_id=round_id,
                candidate_id=candidate_id,
                status=parsed,
                feedback=feedback,
            )
        )
        logger.info(
            f"[RESULTS] Round {round_id}: candidate {candidate_id} marked {parsed.value}"
        )
        return result

    async def set_results(
        self,
        round_id: UUID,
        updates: List[ResultUpdate],
    ) -> List[RoundResult]:
        """
        Apply several decisions to one round.

        Every status is validated before anything is written, so a bad entry
        leaves the round untouched. Re-issuing the same batch is a no-op.
        """
        parsed: Dict[UUID, ResultUpdate] = {}
        for update in updates:
            parsed[update.candidate_id] = ResultUpdate(
                candidate_id=update.candidate_id,
                status=_parse_status(update.status),
                feedback=update.feedback,
            )

        await self._require_round(round_id)
        await self._require_candidates(parsed.keys())

        results = []
        for update in parsed.values():
            results.append(
                await self._result_repo.upsert(
                    RoundResultCreate(
                        round_id=round_id,
                        candidate_id=update.candidate_id,
                        status=update.status,
                        feedback=update.feedback,
                    )
                )
            )

        logger.info(f"[RESULTS] Round {round_id}: applied {len(results)} decisions")
        return results

    async def list_rounds_for_drive(self, drive_id: UUID) -> List[RoundView]:
        """Rounds of a drive in ascending number, each with its candidates."""
        if not await self._drive_repo.exists(drive_id):
            raise NotFoundError(
                f"Drive {drive_id} not found",
                operation="select",
                table="drives",
            )

        rounds = await self._round_repo.list_by_drive(drive_id)
        views = {
            round_.id: RoundView(
                id=round_.id,
                drive_id=round_.drive_id,
                round_number=round_.round_number,
                name=round_.name,
                scheduled_at=round_.scheduled_at,
                notes=round_.notes,
            )
            for round_ in rounds
        }

        rows = await self._result_repo.list_with_candidates(list(views.keys()))
        for result, candidate in rows:
            views[result.round_id].candidates.append(
                RoundCandidateView(
                    result_id=result.id,
                    candidate_id=candidate.id,
                    name=candidate.full_name,
                    email=candidate.email,
                    branch=candidate.branch,
                    status=ResultStatus(result.status),
                    feedback=result.feedback,
                    updated_at=result.updated_at,
                )
            )

        return list(views.values())
