"""
Data models for MyGuard.
"""

from myguard.models.report import AnalysisReport, ContractExplanation, Tier
from myguard.models.verdict import ClauseVerdict, ReferenceRecord, Verdict

__all__ = [
    "AnalysisReport",
    "ClauseVerdict",
    "ContractExplanation",
    "ReferenceRecord",
    "Tier",
    "Verdict",
]
