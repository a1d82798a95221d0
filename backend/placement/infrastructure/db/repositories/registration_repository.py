"""
Drive Registration Repository

Registrations are insert-only; the (drive_id, candidate_id) unique
constraint is the final guard against duplicate registrations.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from placement.infrastructure.db.repositories.base_repository import BaseRepository
from placement.infrastructure.db.models.candidate import Candidate
from placement.infrastructure.db.models.registration import (
    DriveRegistration,
    DriveRegistrationCreate,
)


class DriveRegistrationRepository(
    BaseRepository[DriveRegistration, DriveRegistrationCreate]
):
    """Repository for drive registrations."""

    def __init__(self, session: AsyncSession):
        super().__init__(DriveRegistration, session)

    async def get_by_drive_and_candidate(
        self,
        drive_id: UUID,
        candidate_id: UUID
    ) -> Optional[DriveRegistration]:
        """Get the registration for a (drive, candidate) pair."""
        stmt = select(DriveRegistration).where(
            DriveRegistration.drive_id == drive_id,
            DriveRegistration.candidate_id == candidate_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def candidate_ids_for_drive(self, drive_id: UUID) -> List[UUID]:
        """Registered candidate ids for a drive, in registration order."""
        stmt = (
            select(DriveRegistration.candidate_id)
            .where(DriveRegistration.drive_id == drive_id)
            .order_by(DriveRegistration.registered_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_with_candidates(
        self,
        drive_id: UUID
    ) -> List[Tuple[DriveRegistration, Candidate]]:
        """Registrations of a drive joined to their candidate, newest first."""
        stmt = (
            select(DriveRegistration, Candidate)
            .join(Candidate, Candidate.id == DriveRegistration.candidate_id)
            .where(DriveRegistration.drive_id == drive_id)
            .order_by(DriveRegistration.registered_at.desc())
        )
        result = await self._session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def list_by_candidate(self, candidate_id: UUID) -> List[DriveRegistration]:
        """A candidate's registrations, newest first."""
        stmt = (
            select(DriveRegistration)
            .where(DriveRegistration.candidate_id == candidate_id)
            .order_by(DriveRegistration.registered_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_candidate(self, candidate_id: UUID) -> int:
        """Number of drives a candidate registered for."""
        stmt = (
            select(func.count())
            .select_from(DriveRegistration)
            .where(DriveRegistration.candidate_id == candidate_id)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()
