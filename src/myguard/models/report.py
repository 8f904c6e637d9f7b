"""
Document-level analysis models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from myguard.models.verdict import ClauseVerdict


class Tier(str, Enum):
    """Classification strategies, in fallback order."""

    EXTERNAL = "external"
    HEURISTIC = "heuristic"
    SIMILARITY = "similarity"


class AnalysisReport(BaseModel):
    """
    Summary of a contract analysis.

    `breakdown` keeps clauses in the order they appear in the source text.
    """

    model_config = ConfigDict(frozen=True)

    total_clauses: int = Field(..., ge=0)
    allowed_count: int = Field(..., ge=0)
    not_allowed_count: int = Field(..., ge=0)
    allowed_pct: float
    not_allowed_pct: float
    breakdown: tuple[ClauseVerdict, ...] = ()
    tier: Tier | None = Field(default=None, description="Tier that produced the breakdown")


class ContractExplanation(BaseModel):
    """Plain-language explanation of a contract excerpt."""

    summary: str
    key_points: list[str] = Field(default_factory=list)
    recommendations: str
