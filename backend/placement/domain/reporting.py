"""
Placement Reporting

Pure aggregations over SELECTED round results. Every function accepts an
empty input and returns zeros or empty collections.

Every SELECTED row is an offer for CTC purposes, so a candidate selected in
several rounds contributes each of them. Only the placement set and the
per-company volume count candidates once.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Optional, Set


@dataclass(frozen=True)
class SelectionRecord:
    """One SELECTED round result, flattened with its drive and candidate."""
    candidate_id: Hashable
    branch: str
    drive_id: Hashable
    company_name: str
    ctc: Optional[float] = None


@dataclass
class CtcMetrics:
    """Compensation achieved through offers."""
    highest: float = 0.0
    average: float = 0.0
    offers_counted: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "highest_ctc": self.highest,
            "average_ctc": self.average,
            "offers_counted": self.offers_counted,
        }


def unique_offers(records: Iterable[SelectionRecord]) -> List[SelectionRecord]:
    """Collapse records to one per (candidate, drive), keeping first-seen order."""
    offers: Dict[tuple, SelectionRecord] = {}
    for record in records:
        offers.setdefault((record.candidate_id, record.drive_id), record)
    return list(offers.values())


def placement_set(records: Iterable[SelectionRecord]) -> Set[Hashable]:
    """Distinct candidates with at least one SELECTED result anywhere."""
    return {record.candidate_id for record in records}


def placement_rate(placed_count: int, total_candidates: int, precision: int = 1) -> float:
    """
    Percentage of candidates placed.

    Returns 0.0 when there are no candidates.
    """
    if total_candidates <= 0:
        return 0.0
    return round(placed_count / total_candidates * 100, precision)


def branch_breakdown(records: Iterable[SelectionRecord]) -> List[Dict[str, Any]]:
    """
    Placed candidates per branch, each candidate counted once.

    Returns [{"name": "CSE", "value": 12}, ...] sorted by count, then name.
    """
    branch_of: Dict[Hashable, str] = {}
    for record in records:
        branch_of.setdefault(record.candidate_id, record.branch)

    counts = Counter(branch_of.values())
    return [
        {"name": branch, "value": count}
        for branch, count in sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    ]


def company_selection_volume(records: Iterable[SelectionRecord]) -> List[Dict[str, Any]]:
    """
    Distinct selected candidates per drive, highest volume first.

    Returns [{"drive_id": ..., "name": "Acme", "value": 4}, ...]
    """
    names: Dict[Hashable, str] = {}
    counts: Counter = Counter()
    for offer in unique_offers(records):
        names.setdefault(offer.drive_id, offer.company_name)
        counts[offer.drive_id] += 1

    return [
        {"drive_id": drive_id, "name": names[drive_id], "value": count}
        for drive_id, count in sorted(
            counts.items(), key=lambda item: (-item[1], names[item[0]])
        )
    ]


def ctc_metrics(records: Iterable[SelectionRecord], precision: int = 2) -> CtcMetrics:
    """
    Highest and average CTC over SELECTED rows.

    Rows are not deduplicated. Drives with no CTC, or a CTC of 0, are skipped.
    """
    values = [record.ctc for record in records if record.ctc]
    if not values:
        return CtcMetrics()

    return CtcMetrics(
        highest=float(max(values)),
        average=round(sum(values) / len(values), precision),
        offers_counted=len(values),
    )


def dashboard_stats(
    records: Iterable[SelectionRecord],
    total_candidates: int,
    rate_precision: int = 1,
    ctc_precision: int = 2,
) -> Dict[str, Any]:
    """Headline KPIs for the placement dashboard."""
    records = list(records)
    placed = placement_set(records)
    metrics = ctc_metrics(records, ctc_precision)

    return {
        "total_candidates": total_candidates,
        "total_placed": len(placed),
        "placement_rate": placement_rate(len(placed), total_candidates, rate_precision),
        "highest_ctc": metrics.highest,
        "average_ctc": metrics.average,
    }
