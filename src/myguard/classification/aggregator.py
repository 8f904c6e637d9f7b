"""Aggregation of clause verdicts into a document report."""

from collections.abc import Iterable

from myguard.models.report import AnalysisReport, Tier
from myguard.models.verdict import ClauseVerdict, Verdict


def _percentage(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return count / total * 100.0


def aggregate(
    total_clauses: int,
    verdicts: Iterable[ClauseVerdict],
    tier: Tier | None = None,
) -> AnalysisReport:
    """Count Allowed and Not Allowed verdicts and build the report."""
    breakdown = tuple(verdicts)
    allowed = sum(1 for v in breakdown if v.label == Verdict.ALLOWED)
    not_allowed = sum(1 for v in breakdown if v.label == Verdict.NOT_ALLOWED)

    return AnalysisReport(
        total_clauses=total_clauses,
        allowed_count=allowed,
        not_allowed_count=not_allowed,
        allowed_pct=_percentage(allowed, total_clauses),
        not_allowed_pct=_percentage(not_allowed, total_clauses),
        breakdown=breakdown,
        tier=tier,
    )


def empty_report() -> AnalysisReport:
    """Report for a document with no clauses."""
    return aggregate(0, ())
