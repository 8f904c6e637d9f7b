"""Keyword rules for the heuristic classification tier.

Each phrase class adds a fixed weight when any of its phrases appears in
the clause. The resulting score is combined with the similarity result
to produce the final verdict.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

import structlog

from myguard.classification.similarity import SimilarityClassifier
from myguard.exceptions import EmptyInputError
from myguard.models.verdict import ClauseVerdict, Verdict

logger = structlog.get_logger(__name__)


class PhraseClass(str, Enum):
    """Keyword families recognised by the rule scorer."""
    RESTRICTIVE = "restrictive"  # one-sided powers
    PENALTY = "penalty"          # extreme penalties
    FAIRNESS = "fairness"        # balanced terms


@dataclass(frozen=True)
class PhraseRule:
    """A phrase family and the weight it contributes, in tenths."""
    phrase_class: PhraseClass
    weight: int
    phrases: tuple[str, ...]


PHRASE_RULES: tuple[PhraseRule, ...] = (
    PhraseRule(
        phrase_class=PhraseClass.RESTRICTIVE,
        weight=-3,
        phrases=(
            "at any time",
            "without notice",
            "without consent",
            "without reason",
            "unlimited",
            "no obligation",
            "may not request",
            "not entitled",
            "not responsible",
            "not liable",
        ),
    ),
    PhraseRule(
        phrase_class=PhraseClass.PENALTY,
        weight=-3,
        phrases=(
            "immediate termination",
            "forfeit",
            "waive all rights",
            "no refund",
            "20%",
            "25%",
            "30%",
        ),
    ),
    PhraseRule(
        phrase_class=PhraseClass.FAIRNESS,
        weight=3,
        phrases=(
            "right to",
            "entitled to",
            "reasonable",
            "mutual",
            "agreed",
            "notice",
            "consent",
        ),
    ),
)

# Decision thresholds, in tenths
STRONG_SIGNAL = 5
WEAK_SIGNAL = 2

STRONG_CONFIDENCE = 0.85
WEAK_CONFIDENCE = 0.7
# Below this similarity a weak rule signal overrides the corpus match
SIMILARITY_TRUST = 0.6


@dataclass
class RuleScore:
    """Signed rule score for a clause."""
    tenths: int = 0
    matched: list[PhraseClass] = field(default_factory=list)

    @property
    def score(self) -> float:
        return self.tenths / 10


def score_clause(clause: str) -> RuleScore:
    """Score a clause against every phrase family (case-insensitive)."""
    lowered = clause.lower()
    result = RuleScore()
    for rule in PHRASE_RULES:
        if any(phrase in lowered for phrase in rule.phrases):
            result.tenths += rule.weight
            result.matched.append(rule.phrase_class)
    return result


def combine(
    rule_score: RuleScore, label: Verdict, similarity: float
) -> tuple[Verdict, float]:
    """Merge a rule score with a similarity result into (label, confidence)."""
    tenths = rule_score.tenths

    if tenths <= -STRONG_SIGNAL:
        return Verdict.NOT_ALLOWED, STRONG_CONFIDENCE
    if tenths >= STRONG_SIGNAL:
        return Verdict.ALLOWED, STRONG_CONFIDENCE

    if similarity < SIMILARITY_TRUST:
        if tenths < -WEAK_SIGNAL:
            return Verdict.NOT_ALLOWED, WEAK_CONFIDENCE
        if tenths > WEAK_SIGNAL:
            return Verdict.ALLOWED, WEAK_CONFIDENCE

    return label, similarity


class RuleScorer:
    """Heuristic tier: keyword rules backed by the similarity classifier."""

    def __init__(self, similarity: SimilarityClassifier):
        self.similarity = similarity

    def classify(self, clause: str) -> ClauseVerdict:
        rule_score = score_clause(clause)
        base_label, base_similarity = self.similarity.classify(clause)
        label, confidence = combine(rule_score, base_label, base_similarity)
        return ClauseVerdict(clause=clause, label=label, confidence=confidence)

    def classify_all(self, clauses: Iterable[str]) -> list[ClauseVerdict]:
        """Classify every clause in order; raise EmptyInputError if there are none."""
        verdicts = [self.classify(clause) for clause in clauses]
        if not verdicts:
            raise EmptyInputError()
        logger.debug("heuristic_tier_completed", clauses=len(verdicts))
        return verdicts
