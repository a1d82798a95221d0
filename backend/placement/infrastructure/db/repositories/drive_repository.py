"""
Drive Repository

Read access to the drive catalog.
"""

from typing import Dict, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from placement.infrastructure.db.repositories.base_repository import BaseRepository
from placement.infrastructure.db.models.drive import Drive, DriveCreate


class DriveRepository(BaseRepository[Drive, DriveCreate]):
    """Repository for drives."""

    def __init__(self, session: AsyncSession):
        super().__init__(Drive, session)

    async def get_many(self, drive_ids: List[UUID]) -> Dict[UUID, Drive]:
        """Load several drives at once, keyed by id."""
        if not drive_ids:
            return {}
        stmt = select(Drive).where(Drive.id.in_(drive_ids))
        result = await self._session.execute(stmt)
        return {drive.id: drive for drive in result.scalars().all()}
