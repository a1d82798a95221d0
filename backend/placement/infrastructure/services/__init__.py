"""
Application Services for the Placement Tracker

Each public method is one unit of work over the caller's session.
Services flush; the session owner commits or rolls back.
"""

from placement.infrastructure.services.registration_service import RegistrationService
from placement.infrastructure.services.round_service import RoundCreation, RoundService
from placement.infrastructure.services.result_ledger_service import (
    ResultLedgerService,
    ResultUpdate,
    RoundCandidateView,
    RoundView,
)
from placement.infrastructure.services.placement_report_service import (
    PlacementReportService,
)
from placement.infrastructure.services.student_progress_service import (
    StudentProgressService,
)


__all__ = [
    "RegistrationService",
    "RoundCreation",
    "RoundService",
    "ResultLedgerService",
    "ResultUpdate",
    "RoundCandidateView",
    "RoundView",
    "PlacementReportService",
    "StudentProgressService",
]
