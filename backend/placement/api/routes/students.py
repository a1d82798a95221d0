"""
Student API Routes

The calling student's own registrations and round progress.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from placement.api.dependencies import get_current_candidate_id
from placement.infrastructure.db.dependencies import get_session
from placement.infrastructure.services.student_progress_service import (
    StudentProgressService,
)


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/students", tags=["Students"])


class StatsResponse(BaseModel):
    applications_count: int
    pending_rounds_count: int


class RoundProgressResponse(BaseModel):
    round_id: UUID
    round_number: int
    name: str
    scheduled_at: datetime
    status: Optional[str] = None


class ApplicationResponse(BaseModel):
    registration_id: UUID
    registered_at: datetime
    drive_id: UUID
    company_name: str
    job_role: str
    ctc: Optional[float] = None
    drive_status: str
    drive_date: Optional[datetime] = None
    rounds: List[RoundProgressResponse]


@router.get("/me/stats", response_model=StatsResponse)
async def get_my_stats(
    candidate_id: UUID = Depends(get_current_candidate_id),
    session: AsyncSession = Depends(get_session),
):
    """Registration and pending-round counts for the calling student."""
    return await StudentProgressService(session).get_stats(candidate_id)


@router.get("/me/applications", response_model=List[ApplicationResponse])
async def get_my_applications(
    candidate_id: UUID = Depends(get_current_candidate_id),
    session: AsyncSession = Depends(get_session),
):
    """The calling student's registrations with per-round status."""
    applications = await StudentProgressService(session).get_applications(candidate_id)
    return [
        ApplicationResponse(
            registration_id=app.registration_id,
            registered_at=app.registered_at,
            drive_id=app.drive_id,
            company_name=app.company_name,
            job_role=app.job_role,
            ctc=app.ctc,
            drive_status=app.drive_status.value,
            drive_date=app.drive_date,
            rounds=[
                RoundProgressResponse(
                    round_id=r.round_id,
                    round_number=r.round_number,
                    name=r.name,
                    scheduled_at=r.scheduled_at,
                    status=r.status.value if r.status else None,
                )
                for r in app.rounds
            ],
        )
        for app in applications
    ]
