"""
Round Result API Routes

Administrative decisions on a round's candidates.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from placement.api.dependencies import Principal, require_admin
from placement.infrastructure.db.dependencies import get_session
from placement.infrastructure.services.result_ledger_service import (
    ResultLedgerService,
    ResultUpdate,
)


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/rounds", tags=["Rounds"])


# =============================================================================
# Request/Response Schemas
# =============================================================================

class SetResultRequest(BaseModel):
    candidate_id: UUID
    # Validated by the service so an unknown status maps to 400
    status: str = Field(..., description="PENDING, SELECTED or REJECTED")
    feedback: Optional[str] = Field(None, max_length=2000)


class BulkResultsRequest(BaseModel):
    results: List[SetResultRequest] = Field(..., min_length=1)


class ResultResponse(BaseModel):
    id: UUID
    round_id: UUID
    candidate_id: UUID
    status: str
    feedback: Optional[str] = None
    updated_at: datetime


def _to_response(result) -> ResultResponse:
    return ResultResponse(
        id=result.id,
        round_id=result.round_id,
        candidate_id=result.candidate_id,
        status=getattr(result.status, "value", result.status),
        feedback=result.feedback,
        updated_at=result.updated_at,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.patch("/{round_id}/results", response_model=ResultResponse)
async def set_result(
    round_id: UUID,
    request: SetResultRequest,
    _admin: Principal = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Mark one candidate's result in a round (admin)."""
    service = ResultLedgerService(session)
    result = await service.set_result(
        round_id=round_id,
        candidate_id=request.candidate_id,
        status=request.status,
        feedback=request.feedback,
    )
    return _to_response(result)


@router.put("/{round_id}/results", response_model=List[ResultResponse])
async def set_results(
    round_id: UUID,
    request: BulkResultsRequest,
    _admin: Principal = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """Mark several results of a round at once (admin)."""
    service = ResultLedgerService(session)
    results = await service.set_results(
        round_id,
        [
            ResultUpdate(
                candidate_id=item.candidate_id,
                status=item.status,
                feedback=item.feedback,
            )
            for item in request.results
        ],
    )
    return [_to_response(result) for result in results]
