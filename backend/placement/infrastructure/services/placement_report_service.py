"""
Placement Report Service

Loads SELECTED results and hands them to the pure aggregations in
placement.domain.reporting. Nothing is cached: every call reads the
current rows.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, List, Set
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from placement.config.settings import settings
from placement.domain import reporting
from placement.domain.reporting import CtcMetrics, SelectionRecord
from placement.infrastructure.db.repositories.candidate_repository import CandidateRepository
from placement.infrastructure.db.repositories.round_repository import RoundResultRepository


logger = logging.getLogger(__name__)

UNPLACED_LABEL = "Unplaced"
COMPANY_SEPARATOR = " | "


class PlacementReportService:
    """Read-only placement statistics for administrators."""

    def __init__(self, session: AsyncSession):
        self._candidate_repo = CandidateRepository(session)
        self._result_repo = RoundResultRepository(session)

    async def _records(self) -> List[SelectionRecord]:
        return await self._result_repo.selected_records()

    async def placement_set(self) -> Set[UUID]:
        """Candidates with at least one SELECTED result."""
        return reporting.placement_set(await self._records())

    async def placement_rate(self) -> float:
        """Placed candidates as a percentage of all candidates."""
        placed = await self.placement_set()
        total = await self._candidate_repo.count()
        return reporting.placement_rate(len(placed), total, settings.report_precision)

    async def branch_placements(self) -> List[Dict[str, Any]]:
        """Placed candidates per branch."""
        return reporting.branch_breakdown(await self._records())

    async def company_selections(self) -> List[Dict[str, Any]]:
        """Distinct selected candidates per drive, highest first."""
        return reporting.company_selection_volume(await self._records())

    async def ctc_metrics(self) -> CtcMetrics:
        """Highest and average CTC over all offers."""
        return reporting.ctc_metrics(await self._records(), settings.ctc_precision)

    async def dashboard_stats(self) -> Dict[str, Any]:
        """Headline KPIs in one payload."""
        records = await self._records()
        total = await self._candidate_repo.count()
        stats = reporting.dashboard_stats(
            records,
            total,
            rate_precision=settings.report_precision,
            ctc_precision=settings.ctc_precision,
        )
        logger.debug(f"[REPORTS] Dashboard stats: {stats}")
        return stats

    async def export_candidates(self) -> List[Dict[str, Any]]:
        """
        One flat row per candidate, ordered by enrollment number.

        Each SELECTED result is one offer. A drive without a CTC contributes
        its company name but no compensation.
        """
        offers_by_candidate: Dict[UUID, List[SelectionRecord]] = defaultdict(list)
        for offer in await self._records():
            offers_by_candidate[offer.candidate_id].append(offer)

        rows = []
        for candidate in await self._candidate_repo.list_by_enrollment():
            offers = offers_by_candidate.get(candidate.id, [])
            ctcs = [offer.ctc for offer in offers if offer.ctc]
            rows.append({
                "enrollment_number": candidate.enrollment_number,
                "first_name": candidate.first_name,
                "last_name": candidate.last_name,
                "email": candidate.email,
                "branch": candidate.branch,
                "cgpa": candidate.cgpa,
                "tenth_percent": candidate.tenth_percent,
                "twelfth_percent": candidate.twelfth_percent,
                "active_backlogs": "YES" if candidate.has_active_backlog else "NO",
                "total_offers": len(offers),
                "companies_selected": (
                    COMPANY_SEPARATOR.join(offer.company_name for offer in offers)
                    or UNPLACED_LABEL
                ),
                "highest_ctc_secured": float(max(ctcs)) if ctcs else 0.0,
            })

        logger.info(f"[REPORTS] Exported {len(rows)} candidate rows")
        return rows
