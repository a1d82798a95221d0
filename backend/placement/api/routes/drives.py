"""
Drive API Routes

Registration, eligibility preview, and round management for a drive.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from placement.api.dependencies import (
    Principal,
    get_current_candidate_id,
    get_current_principal,
    require_admin,
)
from placement.infrastructure.db.dependencies import get_session
from placement.infrastructure.services.registration_service import RegistrationService
from placement.infrastructure.services.result_ledger_service import ResultLedgerService
from placement.infrastructure.services.round_service import RoundService


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/drives", tags=["Drives"])


# =============================================================================
# Request/Response Schemas
# =============================================================================

class RegistrationResponse(BaseModel):
    id: UUID
    drive_id: UUID
    candidate_id: UUID
    is_eligible: bool
    registered_at: datetime


class EligibilityResponse(BaseModel):
    eligible: bool
    reasons: List[str]


class RegisteredCandidateResponse(BaseModel):
    registration_id: UUID
    candidate_id: UUID
    name: str
    email: str
    enrollment_number: str
    branch: str
    cgpa: float
    registered_at: datetime


class CreateRoundRequest(BaseModel):
    round_number: int = Field(..., description="1-based position in the pipeline")
    name: str = Field(..., min_length=1, max_length=200)
    scheduled_at: datetime
    notes: Optional[str] = None


class RoundResponse(BaseModel):
    id: UUID
    drive_id: UUID
    round_number: int
    name: str
    scheduled_at: datetime
    notes: Optional[str] = None
    seeded_count: int


class RoundCandidateResponse(BaseModel):
    result_id: UUID
    candidate_id: UUID
    name: str
    email: str
    branch: str
    status: str
    feedback: Optional[str] = None
    updated_at: datetime


class RoundWithCandidatesResponse(BaseModel):
    id: UUID
    drive_id: UUID
    round_number: int
    name: str
    scheduled_at: datetime
    notes: Optional[str] = None
    candidates: List[RoundCandidateResponse]


# =============================================================================
# Registration Endpoints
# =============================================================================

@router.post(
    "/{drive_id}/register",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_drive(
    drive_id: UUID,
    candidate_id: UUID = Depends(get_current_candidate_id),
    session: AsyncSession = Depends(get_session),
):
    """Register the calling student for a drive."""
    service = RegistrationService(session)
    registration = await service.register(candidate_id, drive_id)
    return RegistrationResponse(
        id=registration.id,
        drive_id=registration.drive_id,
        candidate_id=registration.candidate_id,
        is_eligible=registration.is_eligible,
        registered_at=registration.registered_at,
    )


@router.get("/{drive_id}/eligibility", response_model=EligibilityResponse)
async def check_eligibility(
    drive_id: UUID,
    candidate_id: UUID = Depends(get_current_candidate_id),
    session: AsyncSession = Depends(get_session),
):
    """Preview whether the calling student may register."""
    service = RegistrationService(session)
    verdict = await service.check_eligibility(candidate_id, drive_id)
    return EligibilityResponse(**verdict.to_dict())


@router.get(
    "/{drive_id}/registrations",
    response_model=List[RegisteredCandidateResponse],
)
async def list_registrations(
    drive_id: UUID,
    _admin: Principal = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """List candidates registered for a drive (admin)."""
    service = RegistrationService(session)
    registered = await service.list_registrations(drive_id)
    return [RegisteredCandidateResponse(**vars(item)) for item in registered]


# =============================================================================
# Round Endpoints
# =============================================================================

@router.post(
    "/{drive_id}/rounds",
    response_model=RoundResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_round(
    drive_id: UUID,
    request: CreateRoundRequest,
    _admin: Principal = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Create the next round of a drive and seed its candidates (admin)."""
    service = RoundService(session)
    created = await service.create_round(
        drive_id=drive_id,
        round_number=request.round_number,
        name=request.name,
        scheduled_at=request.scheduled_at,
        notes=request.notes,
    )
    new_round = created.round
    return RoundResponse(
        id=new_round.id,
        drive_id=new_round.drive_id,
        round_number=new_round.round_number,
        name=new_round.name,
        scheduled_at=new_round.scheduled_at,
        notes=new_round.notes,
        seeded_count=created.seeded_count,
    )


@router.get("/{drive_id}/rounds", response_model=List[RoundWithCandidatesResponse])
async def list_rounds(
    drive_id: UUID,
    _principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_session),
):
    """Rounds of a drive in order, with each round's candidates."""
    service = ResultLedgerService(session)
    rounds = await service.list_rounds_for_drive(drive_id)
    return [
        RoundWithCandidatesResponse(
            id=view.id,
            drive_id=view.drive_id,
            round_number=view.round_number,
            name=view.name,
            scheduled_at=view.scheduled_at,
            notes=view.notes,
            candidates=[
                RoundCandidateResponse(
                    result_id=c.result_id,
                    candidate_id=c.candidate_id,
                    name=c.name,
                    email=c.email,
                    branch=c.branch,
                    status=c.status.value,
                    feedback=c.feedback,
                    updated_at=c.updated_at,
                )
                for c in view.candidates
            ],
        )
        for view in rounds
    ]
