"""
Round Seeding

Computes the candidate pool of a new selection round.

Round 1 takes every registered candidate. Round N takes only the candidates
SELECTED in round N-1, which makes the pipeline a narrowing funnel: a
candidate REJECTED or left PENDING in round K never reaches round K+1.
"""

from typing import Iterable, List, Optional, Tuple, TypeVar

from placement.domain.models import ResultStatus


CandidateId = TypeVar("CandidateId")


def seed_pool(
    round_number: int,
    registered_ids: Iterable[CandidateId],
    previous_results: Optional[Iterable[Tuple[CandidateId, ResultStatus]]] = None,
) -> List[CandidateId]:
    """
    Candidate ids to seed into a round, in first-seen order, without duplicates.

    Args:
        round_number: 1-based number of the round being created
        registered_ids: Candidates registered for the drive (used for round 1)
        previous_results: (candidate_id, status) pairs of round N-1, or None
            when that round does not exist

    Returns:
        List of candidate ids; empty when round N-1 is missing
    """
    if round_number < 1:
        raise ValueError(f"Round number must be at least 1, got {round_number}")

    if round_number == 1:
        source: Iterable[CandidateId] = registered_ids
    elif previous_results is None:
        return []
    else:
        source = (
            candidate_id
            for candidate_id, status in previous_results
            if status == ResultStatus.SELECTED
        )

    pool: List[CandidateId] = []
    seen = set()
    for candidate_id in source:
        if candidate_id not in seen:
            seen.add(candidate_id)
            pool.append(candidate_id)
    return pool
