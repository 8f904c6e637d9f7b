"""Nearest-neighbour clause classification against the reference corpus.

The overlap metric is deliberately asymmetric: only the clause's words
are looked up in the reference. Callers must pass the clause first.
"""

from myguard.corpus.corpus import LabeledCorpus
from myguard.models.verdict import Verdict

DEFAULT_THRESHOLD = 0.5


def word_overlap(clause: str, reference: str) -> float:
    """Fraction of the clause's words found in the reference.

    Every occurrence of a word in the clause counts, and the total is
    divided by the longer of the two word sequences.
    """
    clause_words = clause.lower().split()
    reference_words = reference.lower().split()

    longest = max(len(clause_words), len(reference_words))
    if longest == 0:
        return 0.0

    vocabulary = set(reference_words)
    common = sum(1 for word in clause_words if word in vocabulary)
    return common / longest


class SimilarityClassifier:
    """Labels a clause with the label of its most similar reference record."""

    def __init__(self, corpus: LabeledCorpus, threshold: float = DEFAULT_THRESHOLD):
        self.corpus = corpus
        self.threshold = threshold

    def classify(self, clause: str) -> tuple[Verdict, float]:
        """
        Return (label, similarity) for the closest reference record.

        Ties keep the earliest record. Below the threshold the label is
        Unclassified but the similarity is still reported.
        """
        best_similarity = 0.0
        best_label = Verdict.UNCLASSIFIED

        for record in self.corpus:
            similarity = word_overlap(clause, record.text)
            if similarity > best_similarity:
                best_similarity = similarity
                best_label = record.label

        if best_similarity < self.threshold:
            best_label = Verdict.UNCLASSIFIED
        return best_label, best_similarity
