"""
Clause classification pipeline: segmentation, tiers and aggregation.
"""

from myguard.classification.aggregator import aggregate, empty_report
from myguard.classification.external import (
    CompletionClient,
    ExternalModelClassifier,
    clean_response,
    parse_verdict,
)
from myguard.classification.orchestrator import TIER_ORDER, TierOrchestrator
from myguard.classification.rules import RuleScorer, combine, score_clause
from myguard.classification.segmenter import segment_clauses
from myguard.classification.similarity import SimilarityClassifier, word_overlap

__all__ = [
    "TIER_ORDER",
    "CompletionClient",
    "ExternalModelClassifier",
    "RuleScorer",
    "SimilarityClassifier",
    "TierOrchestrator",
    "aggregate",
    "clean_response",
    "combine",
    "empty_report",
    "parse_verdict",
    "score_clause",
    "segment_clauses",
    "word_overlap",
]
