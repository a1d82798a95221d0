"""
Repositories for Selection Rounds and Round Results

CRUD operations for:
- SelectionRoundRepository: Rounds of a drive
- RoundResultRepository: Per-candidate outcomes, upserted by (round, candidate)
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID, uuid4

from sqlalchemy import select, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from placement.domain.models import ResultStatus
from placement.domain.reporting import SelectionRecord
from placement.infrastructure.db.repositories.base_repository import BaseRepository
from placement.infrastructure.db.models.base import utcnow
from placement.infrastructure.db.models.candidate import Candidate
from placement.infrastructure.db.models.drive import Drive
from placement.infrastructure.db.models.selection_round import (
    SelectionRound,
    SelectionRoundCreate,
    RoundResult,
    RoundResultCreate,
)

# Dialects with INSERT ... ON CONFLICT support
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SelectionRoundRepository(BaseRepository[SelectionRound, SelectionRoundCreate]):
    """Repository for selection rounds."""

    def __init__(self, session: AsyncSession):
        super().__init__(SelectionRound, session)

    async def get_by_drive_and_number(
        self,
        drive_id: UUID,
        round_number: int
    ) -> Optional[SelectionRound]:
        """Get a drive's round by its number."""
        stmt = select(SelectionRound).where(
            SelectionRound.drive_id == drive_id,
            SelectionRound.round_number == round_number,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_drive(self, drive_id: UUID) -> List[SelectionRound]:
        """Rounds of a drive in ascending round number."""
        stmt = (
            select(SelectionRound)
            .where(SelectionRound.drive_id == drive_id)
            .order_by(SelectionRound.round_number)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_drives(self, drive_ids: List[UUID]) -> Dict[UUID, List[SelectionRound]]:
        """Rounds for several drives, grouped by drive and ordered by number."""
        grouped: Dict[UUID, List[SelectionRound]] = {drive_id: [] for drive_id in drive_ids}
        if not drive_ids:
            return grouped
        stmt = (
            select(SelectionRound)
            .where(SelectionRound.drive_id.in_(drive_ids))
            .order_by(SelectionRound.drive_id, SelectionRound.round_number)
        )
        result = await self._session.execute(stmt)
        for round_ in result.scalars().all():
            grouped[round_.drive_id].append(round_)
        return grouped


class RoundResultRepository(BaseRepository[RoundResult, RoundResultCreate]):
    """Repository for round results."""

    def __init__(self, session: AsyncSession):
        super().__init__(RoundResult, session)

    async def get_by_round_and_candidate(
        self,
        round_id: UUID,
        candidate_id: UUID
    ) -> Optional[RoundResult]:
        """Get the result of one candidate in one round."""
        stmt = select(RoundResult).where(
            RoundResult.round_id == round_id,
            RoundResult.candidate_id == candidate_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, data: RoundResultCreate) -> RoundResult:
        """
        Create or update the result for round + candidate.

        Runs as one INSERT ... ON CONFLICT DO UPDATE, so two first-time
        writes for the same pair end with the last writer's decision
        instead of a unique-constraint error.
        """
        insert = _UPSERT_INSERTS[self._session.get_bind().dialect.name]
        now = utcnow()

        stmt = insert(RoundResult).values(
            id=uuid4(),
            round_id=data.round_id,
            candidate_id=data.candidate_id,
            status=data.status,
            feedback=data.feedback,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["round_id", "candidate_id"],
            set_={
                "status": stmt.excluded.status,
                "feedback": stmt.excluded.feedback,
                "updated_at": now,
            },
        )
        await self._session.execute(stmt)

        # The row may already sit in the identity map with its old values
        refreshed = await self._session.execute(
            select(RoundResult)
            .where(
                RoundResult.round_id == data.round_id,
                RoundResult.candidate_id == data.candidate_id,
            )
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    async def list_by_round(self, round_id: UUID) -> List[RoundResult]:
        """All results of a round."""
        stmt = select(RoundResult).where(RoundResult.round_id == round_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_with_candidates(
        self,
        round_ids: List[UUID]
    ) -> List[Tuple[RoundResult, Candidate]]:
        """Results of several rounds joined to their candidate, ordered by name."""
        if not round_ids:
            return []
        stmt = (
            select(RoundResult, Candidate)
            .join(Candidate, Candidate.id == RoundResult.candidate_id)
            .where(RoundResult.round_id.in_(round_ids))
            .order_by(Candidate.first_name, Candidate.last_name)
        )
        result = await self._session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def list_by_candidate(self, candidate_id: UUID) -> Dict[UUID, RoundResult]:
        """A candidate's results keyed by round id."""
        stmt = select(RoundResult).where(RoundResult.candidate_id == candidate_id)
        result = await self._session.execute(stmt)
        return {row.round_id: row for row in result.scalars().all()}

    async def count_by_candidate_and_status(
        self,
        candidate_id: UUID,
        status: ResultStatus
    ) -> int:
        """Number of a candidate's results in a given status."""
        stmt = (
            select(func.count())
            .select_from(RoundResult)
            .where(
                RoundResult.candidate_id == candidate_id,
                RoundResult.status == status,
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def selected_records(self) -> List[SelectionRecord]:
        """
        Every SELECTED result joined to its drive and candidate.

        One record per SELECTED row, uncollapsed.
        """
        stmt = (
            select(
                RoundResult.candidate_id,
                Candidate.branch,
                Drive.id,
                Drive.company_name,
                Drive.ctc,
            )
            .join(SelectionRound, SelectionRound.id == RoundResult.round_id)
            .join(Drive, Drive.id == SelectionRound.drive_id)
            .join(Candidate, Candidate.id == RoundResult.candidate_id)
            .where(RoundResult.status == ResultStatus.SELECTED)
        )
        result = await self._session.execute(stmt)
        return [
            SelectionRecord(
                candidate_id=candidate_id,
                branch=branch,
                drive_id=drive_id,
                company_name=company_name,
                ctc=ctc,
            )
            for candidate_id, branch, drive_id, company_name, ctc in result.all()
        ]
