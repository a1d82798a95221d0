"""
Integration tests for RegistrationService over an in-memory database.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy import select, func

from placement.domain.models import DriveStatus
from placement.infrastructure.db.models import DriveRegistration
from placement.infrastructure.exceptions import (
    ConflictError,
    EligibilityRejectedError,
    InvalidArgumentError,
    NotFoundError,
)
from placement.infrastructure.services.registration_service import RegistrationService


async def _registration_count(session) -> int:
    result = await session.execute(select(func.count()).select_from(DriveRegistration))
    return result.scalar_one()


class TestRegister:

    async def test_eligible_candidate_is_registered(self, session, make_candidate, make_drive):
        candidate = await make_candidate()
        drive = await make_drive()

        registration = await RegistrationService(session).register(candidate.id, drive.id)

        assert registration.drive_id == drive.id
        assert registration.candidate_id == candidate.id
        assert registration.is_eligible is True
        assert await _registration_count(session) == 1

    async def test_branch_match_is_case_insensitive(self, session, make_candidate, make_drive):
        candidate = await make_candidate(branch="it")
        drive = await make_drive(allowed_branches=" cse , It ")

        registration = await RegistrationService(session).register(candidate.id, drive.id)
        assert registration.candidate_id == candidate.id

    async def test_ineligible_candidate_gets_every_reason(
        self, session, make_candidate, make_drive
    ):
        candidate = await make_candidate(cgpa=6.5, branch="MECH", has_active_backlog=True)
        drive = await make_drive()

        with pytest.raises(EligibilityRejectedError) as exc_info:
            await RegistrationService(session).register(candidate.id, drive.id)

        assert exc_info.value.reasons == [
            "grade average below 7.0",
            "unresolved backlogs are not allowed",
            "branch MECH not eligible (allowed: CSE, IT)",
        ]
        assert await _registration_count(session) == 0

    async def test_duplicate_registration_conflicts(self, session, make_candidate, make_drive):
        candidate = await make_candidate()
        drive = await make_drive()
        service = RegistrationService(session)
        first = await service.register(candidate.id, drive.id)

        with pytest.raises(ConflictError):
            await service.register(candidate.id, drive.id)

        rows = (await session.execute(select(DriveRegistration))).scalars().all()
        assert [r.id for r in rows] == [first.id]

    async def test_storage_constraint_catches_race(self, session, make_candidate, make_drive):
        """A duplicate that slips past the pre-check is stopped by the unique constraint."""
        candidate = await make_candidate()
        drive = await make_drive()
        service = RegistrationService(session)
        await service.register(candidate.id, drive.id)
        await session.commit()

        with patch(
            "placement.infrastructure.services.registration_service."
            "DriveRegistrationRepository.get_by_drive_and_candidate",
            new=AsyncMock(return_value=None),
        ):
            with pytest.raises(ConflictError):
                await service.register(candidate.id, drive.id)

        await session.rollback()
        assert await _registration_count(session) == 1

    @pytest.mark.parametrize("status", [DriveStatus.UPCOMING, DriveStatus.COMPLETED])
    async def test_inactive_drive_rejects_registration(
        self, session, make_candidate, make_drive, status
    ):
        candidate = await make_candidate()
        drive = await make_drive(status=status)

        with pytest.raises(InvalidArgumentError):
            await RegistrationService(session).register(candidate.id, drive.id)
        assert await _registration_count(session) == 0

    async def test_missing_candidate(self, session, make_drive):
        drive = await make_drive()
        with pytest.raises(NotFoundError):
            await RegistrationService(session).register(uuid4(), drive.id)

    async def test_missing_drive(self, session, make_candidate):
        candidate = await make_candidate()
        with pytest.raises(NotFoundError):
            await RegistrationService(session).register(candidate.id, uuid4())


class TestCheckEligibility:

    async def test_preview_writes_nothing(self, session, make_candidate, make_drive):
        candidate = await make_candidate(tenth_percent=55.0)
        drive = await make_drive()

        verdict = await RegistrationService(session).check_eligibility(candidate.id, drive.id)

        assert verdict.eligible is False
        assert verdict.reasons == ["10th/12th percentage below 60.0%"]
        assert await _registration_count(session) == 0

    async def test_preview_missing_drive(self, session, make_candidate):
        candidate = await make_candidate()
        with pytest.raises(NotFoundError):
            await RegistrationService(session).check_eligibility(candidate.id, uuid4())


class TestListRegistrations:

    async def test_lists_registered_candidates(self, session, make_candidate, make_drive):
        drive = await make_drive()
        first = await make_candidate(first_name="Ravi", last_name="Kumar")
        second = await make_candidate(first_name="Meera", last_name="Shah", branch="IT")
        service = RegistrationService(session)
        await service.register(first.id, drive.id)
        await service.register(second.id, drive.id)

        registered = await service.list_registrations(drive.id)

        assert {r.candidate_id for r in registered} == {first.id, second.id}
        assert {r.name for r in registered} == {"Ravi Kumar", "Meera Shah"}

    async def test_empty_drive(self, session, make_drive):
        drive = await make_drive()
        assert await RegistrationService(session).list_registrations(drive.id) == []

    async def test_missing_drive(self, session):
        with pytest.raises(NotFoundError):
            await RegistrationService(session).list_registrations(uuid4())
