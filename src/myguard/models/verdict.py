"""
Clause verdict models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Verdict(str, Enum):
    """Classification outcome for a single clause."""

    ALLOWED = "Allowed"
    NOT_ALLOWED = "Not Allowed"
    UNCLASSIFIED = "Unclassified"
    NEUTRAL = "Neutral"

    @classmethod
    def parse(cls, raw: str) -> "Verdict":
        """Parse a label ignoring case and inner whitespace ("not  allowed", "NotAllowed")."""
        key = "".join(raw.split()).lower()
        for verdict in cls:
            if verdict.value.replace(" ", "").lower() == key:
                return verdict
        raise ValueError(f"Unknown verdict label: {raw!r}")


REFERENCE_LABELS = (Verdict.ALLOWED, Verdict.NOT_ALLOWED)


class ReferenceRecord(BaseModel):
    """A labeled example clause from the reference corpus."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    label: Verdict

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reference text is blank")
        return v

    @field_validator("label", mode="before")
    @classmethod
    def parse_label(cls, v: str | Verdict) -> Verdict:
        if not isinstance(v, str):
            raise ValueError("reference label is missing")
        label = v if isinstance(v, Verdict) else Verdict.parse(v)
        if label not in REFERENCE_LABELS:
            raise ValueError(f"reference label must be Allowed or Not Allowed, got {label.value}")
        return label


class ClauseVerdict(BaseModel):
    """The verdict assigned to one clause of a document."""

    model_config = ConfigDict(frozen=True)

    clause: str
    label: Verdict
    confidence: float = Field(..., ge=0.0, le=1.0)
