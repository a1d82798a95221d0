"""
Candidate Repository

Read access to the candidate profile store.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from placement.infrastructure.db.repositories.base_repository import BaseRepository
from placement.infrastructure.db.models.candidate import Candidate, CandidateCreate


class CandidateRepository(BaseRepository[Candidate, CandidateCreate]):
    """Repository for candidates."""

    def __init__(self, session: AsyncSession):
        super().__init__(Candidate, session)

    async def get_by_user_id(self, user_id: UUID) -> Optional[Candidate]:
        """Get the candidate linked to an identity service user."""
        stmt = select(Candidate).where(Candidate.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_enrollment(self) -> List[Candidate]:
        """All candidates ordered by enrollment number (export order)."""
        stmt = select(Candidate).order_by(Candidate.enrollment_number)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
