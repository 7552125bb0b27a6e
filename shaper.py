"""Reshape a raw axe-core result into dashboard-friendly records.

A run produces one ``SummaryRecord`` (counts per result type and per
violation impact) and one ``DetailRecord`` per violation. Everything here is
pure: the only clock read is the single run timestamp, and it can be injected.
"""
import datetime as dt
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, NamedTuple, Optional

from utils import iso_timestamp

SEVERITY_LEVELS = ("critical", "serious", "moderate", "minor")


@dataclass(frozen=True)
class SummaryRecord:
    timestamp: str
    url: Optional[str]
    violations: int
    passes: int
    incomplete: int
    inapplicable: int
    critical: int
    serious: int
    moderate: int
    minor: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DetailRecord:
    timestamp: str
    id: Optional[str]
    impact: Optional[str]
    description: Optional[str]
    help: Optional[str]
    helpUrl: Optional[str]
    nodes: int
    tags: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class FormattedResults(NamedTuple):
    summary: SummaryRecord
    violations: List[DetailRecord]
    full_results: Dict[str, Any]


def severity_counts(violations: List[Dict[str, Any]]) -> Dict[str, int]:
    # exact match only: unknown impacts count toward the total, not a bucket
    counts = {level: 0 for level in SEVERITY_LEVELS}
    for v in violations:
        impact = v.get("impact")
        if isinstance(impact, str) and impact in counts:
            counts[impact] += 1
    return counts


def to_detail(violation: Dict[str, Any], timestamp: str) -> DetailRecord:
    return DetailRecord(
        timestamp=timestamp,
        id=violation.get("id"),
        impact=violation.get("impact"),
        description=violation.get("description"),
        help=violation.get("help"),
        helpUrl=violation.get("helpUrl"),
        nodes=len(violation.get("nodes") or []),
        tags=", ".join(violation.get("tags") or []),
    )


def format_for_grafana(result: Dict[str, Any], now: Optional[dt.datetime] = None) -> FormattedResults:
    timestamp = iso_timestamp(now)
    violations = result.get("violations") or []
    summary = SummaryRecord(
        timestamp=timestamp,
        url=result.get("url"),
        violations=len(violations),
        passes=len(result.get("passes") or []),
        incomplete=len(result.get("incomplete") or []),
        inapplicable=len(result.get("inapplicable") or []),
        **severity_counts(violations),
    )
    details = [to_detail(v, timestamp) for v in violations]
    return FormattedResults(summary=summary, violations=details, full_results=result)
