"""
Report API Routes

Placement statistics for the administrator dashboard and export.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from placement.api.dependencies import Principal, require_admin
from placement.infrastructure.db.dependencies import get_session
from placement.infrastructure.services.placement_report_service import (
    PlacementReportService,
)


logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/reports",
    tags=["Reports"],
    dependencies=[Depends(require_admin)],
)


# =============================================================================
# Response Schemas
# =============================================================================

class DashboardStatsResponse(BaseModel):
    total_candidates: int
    total_placed: int
    placement_rate: float
    highest_ctc: float
    average_ctc: float


class BranchPlacementResponse(BaseModel):
    name: str
    value: int


class CompanySelectionResponse(BaseModel):
    drive_id: UUID
    name: str
    value: int


class CandidateExportRow(BaseModel):
    enrollment_number: str
    first_name: str
    last_name: str
    email: str
    branch: str
    cgpa: float
    tenth_percent: float
    twelfth_percent: float
    active_backlogs: str
    total_offers: int
    companies_selected: str
    highest_ctc_secured: float


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def dashboard_stats(session: AsyncSession = Depends(get_session)):
    """Headline placement KPIs."""
    return await PlacementReportService(session).dashboard_stats()


@router.get("/branch-placements", response_model=List[BranchPlacementResponse])
async def branch_placements(session: AsyncSession = Depends(get_session)):
    """Placed candidates per branch."""
    return await PlacementReportService(session).branch_placements()


@router.get("/company-selections", response_model=List[CompanySelectionResponse])
async def company_selections(session: AsyncSession = Depends(get_session)):
    """Selected candidates per drive, highest volume first."""
    return await PlacementReportService(session).company_selections()


@router.get("/export-candidates", response_model=List[CandidateExportRow])
async def export_candidates(session: AsyncSession = Depends(get_session)):
    """Flat per-candidate rows for spreadsheet export."""
    return await PlacementReportService(session).export_candidates()
