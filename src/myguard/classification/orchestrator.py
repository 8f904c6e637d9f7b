"""
Tier orchestration.

Runs the classification tiers in a fixed order over a whole document:

    external -> heuristic -> similarity

A tier either classifies every clause or fails as a unit, in which case
the next tier starts over from the first clause. Verdicts from
different tiers are never mixed within one report. The similarity tier
is terminal and cannot fail on a non-empty clause list.
"""

from collections.abc import Sequence

import structlog

from myguard.classification.aggregator import aggregate, empty_report
from myguard.classification.external import ExternalModelClassifier
from myguard.classification.rules import RuleScorer
from myguard.classification.segmenter import segment_clauses
from myguard.classification.similarity import SimilarityClassifier
from myguard.exceptions import (
    CollaboratorError,
    EmptyInputError,
    TierFailureError,
)
from myguard.models.report import AnalysisReport, Tier
from myguard.models.verdict import ClauseVerdict

logger = structlog.get_logger(__name__)

TIER_ORDER: tuple[Tier, ...] = (Tier.EXTERNAL, Tier.HEURISTIC, Tier.SIMILARITY)

# Failures that move the orchestrator on to the next tier
RECOVERABLE_ERRORS = (EmptyInputError, TierFailureError, CollaboratorError)


class TierOrchestrator:
    """Classifies clause sequences with tier fallback."""

    def __init__(
        self,
        similarity: SimilarityClassifier,
        scorer: RuleScorer,
        external: ExternalModelClassifier | None = None,
    ):
        self.similarity = similarity
        self.scorer = scorer
        self.external = external

    def _similarity_only(self, clauses: Sequence[str]) -> list[ClauseVerdict]:
        verdicts = []
        for clause in clauses:
            label, similarity = self.similarity.classify(clause)
            verdicts.append(ClauseVerdict(clause=clause, label=label, confidence=similarity))
        return verdicts

    async def _run_tier(self, tier: Tier, clauses: Sequence[str]) -> list[ClauseVerdict]:
        if tier == Tier.EXTERNAL:
            if self.external is None:
                raise TierFailureError(tier.value, "no external model configured")
            return await self.external.classify_all(clauses)
        if tier == Tier.HEURISTIC:
            return self.scorer.classify_all(clauses)
        return self._similarity_only(clauses)

    async def run(self, clauses: Sequence[str]) -> tuple[Tier, list[ClauseVerdict]]:
        """Classify all clauses with the first tier that succeeds."""
        *fallible, terminal = TIER_ORDER

        for tier in fallible:
            try:
                verdicts = await self._run_tier(tier, clauses)
            except RECOVERABLE_ERRORS as e:
                logger.warning("tier_failed", tier=tier.value, error=str(e))
                continue
            if not verdicts:
                logger.warning("tier_failed", tier=tier.value, error="no verdicts")
                continue
            return tier, verdicts

        return terminal, await self._run_tier(terminal, clauses)

    async def analyze_document(self, text: str) -> AnalysisReport:
        """
        Classify every clause of a document and summarise the verdicts.

        Never raises for classification problems: a document with no
        clauses produces an empty report.
        """
        clauses = list(segment_clauses(text))
        if not clauses:
            logger.info("document_has_no_clauses")
            return empty_report()

        tier, verdicts = await self.run(clauses)
        report = aggregate(len(clauses), verdicts, tier)

        logger.info(
            "document_analyzed",
            tier=tier.value,
            clauses=report.total_clauses,
            allowed=report.allowed_count,
            not_allowed=report.not_allowed_count,
        )
        return report

    async def classify_clause(self, text: str) -> ClauseVerdict:
        """Classify a single clause; raises EmptyInputError for blank text."""
        clause = (text or "").strip()
        if not clause:
            raise EmptyInputError("Empty clause received")

        tier, verdicts = await self.run([clause])
        logger.debug("clause_classified", tier=tier.value, label=verdicts[0].label.value)
        return verdicts[0]
