"""
Integration tests for RoundService: round creation and pool seeding.
"""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy import select, func

from placement.domain.models import ResultStatus
from placement.infrastructure.db.models import RoundResult, SelectionRound
from placement.infrastructure.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from placement.infrastructure.services.registration_service import RegistrationService
from placement.infrastructure.services.result_ledger_service import ResultLedgerService
from placement.infrastructure.services.round_service import RoundService


async def _results_for(session, round_id):
    stmt = select(RoundResult).where(RoundResult.round_id == round_id)
    return list((await session.execute(stmt)).scalars().all())


async def _count(session, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.fixture
async def registered_drive(session, make_candidate, make_drive):
    """An ACTIVE drive with four registered candidates."""
    drive = await make_drive()
    candidates = [await make_candidate() for _ in range(4)]
    service = RegistrationService(session)
    for candidate in candidates:
        await service.register(candidate.id, drive.id)
    await session.commit()
    return drive, candidates


class TestFirstRound:

    async def test_seeds_every_registration_as_pending(
        self, session, registered_drive, scheduled_at
    ):
        drive, candidates = registered_drive

        created = await RoundService(session).create_round(
            drive.id, 1, "Aptitude Test", scheduled_at
        )

        assert created.seeded_count == 4
        assert created.round.round_number == 1
        results = await _results_for(session, created.round.id)
        assert {r.candidate_id for r in results} == {c.id for c in candidates}
        assert all(r.status == ResultStatus.PENDING for r in results)

    async def test_drive_without_registrations_starts_empty(
        self, session, make_drive, scheduled_at
    ):
        drive = await make_drive()
        created = await RoundService(session).create_round(drive.id, 1, "Aptitude", scheduled_at)
        assert created.seeded_count == 0


class TestLaterRounds:

    async def test_only_selected_candidates_advance(
        self, session, registered_drive, scheduled_at
    ):
        drive, candidates = registered_drive
        rounds = RoundService(session)
        ledger = ResultLedgerService(session)
        first = await rounds.create_round(drive.id, 1, "Aptitude", scheduled_at)

        await ledger.set_result(first.round.id, candidates[0].id, "SELECTED")
        await ledger.set_result(first.round.id, candidates[1].id, "SELECTED")
        await ledger.set_result(first.round.id, candidates[2].id, "REJECTED")
        # candidates[3] stays PENDING

        second = await rounds.create_round(drive.id, 2, "Technical Interview", scheduled_at)

        assert second.seeded_count == 2
        results = await _results_for(session, second.round.id)
        assert {r.candidate_id for r in results} == {candidates[0].id, candidates[1].id}
        assert all(r.status == ResultStatus.PENDING for r in results)

    async def test_missing_predecessor_gives_empty_round(
        self, session, registered_drive, scheduled_at
    ):
        drive, _ = registered_drive

        created = await RoundService(session).create_round(drive.id, 3, "HR", scheduled_at)

        assert created.seeded_count == 0
        assert await _results_for(session, created.round.id) == []

    async def test_later_decisions_do_not_reseed(self, session, registered_drive, scheduled_at):
        """Round N is seeded once, at creation time."""
        drive, candidates = registered_drive
        rounds = RoundService(session)
        ledger = ResultLedgerService(session)
        first = await rounds.create_round(drive.id, 1, "Aptitude", scheduled_at)
        await ledger.set_result(first.round.id, candidates[0].id, "SELECTED")
        second = await rounds.create_round(drive.id, 2, "Interview", scheduled_at)

        await ledger.set_result(first.round.id, candidates[1].id, "SELECTED")

        assert len(await _results_for(session, second.round.id)) == 1


class TestValidation:

    @pytest.mark.parametrize("round_number", [0, -2])
    async def test_round_number_below_one(self, session, make_drive, scheduled_at, round_number):
        drive = await make_drive()
        with pytest.raises(InvalidArgumentError):
            await RoundService(session).create_round(drive.id, round_number, "x", scheduled_at)

    async def test_missing_drive(self, session, scheduled_at):
        with pytest.raises(NotFoundError):
            await RoundService(session).create_round(uuid4(), 1, "x", scheduled_at)

    async def test_duplicate_round_number(self, session, registered_drive, scheduled_at):
        drive, _ = registered_drive
        service = RoundService(session)
        await service.create_round(drive.id, 1, "Aptitude", scheduled_at)

        with pytest.raises(ConflictError):
            await service.create_round(drive.id, 1, "Aptitude again", scheduled_at)

    async def test_same_number_on_other_drive_is_fine(
        self, session, registered_drive, make_drive, scheduled_at
    ):
        drive, _ = registered_drive
        other = await make_drive(company_name="Globex")
        service = RoundService(session)
        await service.create_round(drive.id, 1, "Aptitude", scheduled_at)
        created = await service.create_round(other.id, 1, "Aptitude", scheduled_at)
        assert created.round.drive_id == other.id


class TestAtomicity:

    async def test_seeding_failure_rolls_back_round(
        self, session, registered_drive, scheduled_at
    ):
        drive, _ = registered_drive

        with patch(
            "placement.infrastructure.services.round_service.RoundResultRepository.create_many",
            new=AsyncMock(side_effect=RuntimeError("disk full")),
        ):
            with pytest.raises(RuntimeError):
                await RoundService(session).create_round(drive.id, 1, "Aptitude", scheduled_at)

        await session.rollback()
        assert await _count(session, SelectionRound) == 0
        assert await _count(session, RoundResult) == 0

    async def test_committed_round_persists_with_results(
        self, session, registered_drive, scheduled_at
    ):
        drive, _ = registered_drive
        await RoundService(session).create_round(drive.id, 1, "Aptitude", scheduled_at)
        await session.commit()

        assert await _count(session, SelectionRound) == 1
        assert await _count(session, RoundResult) == 4
