"""
Reference corpus for similarity classification.
"""

from myguard.corpus.corpus import LabeledCorpus
from myguard.corpus.loader import SEED_RECORDS, load_corpus, parse_records, seed_corpus

__all__ = [
    "LabeledCorpus",
    "SEED_RECORDS",
    "load_corpus",
    "parse_records",
    "seed_corpus",
]
