"""
External model tier.

Wraps a text-completion collaborator. Each clause becomes one prompt;
calls run as asyncio tasks behind a semaphore so the number of requests
in flight is explicit, and each call carries its own timeout.
"""

import asyncio
from collections.abc import Iterable
from typing import Protocol

import structlog

from myguard.exceptions import CollaboratorError, EmptyInputError
from myguard.models.verdict import ClauseVerdict, Verdict

logger = structlog.get_logger(__name__)

CLASSIFICATION_PROMPT = (
    "Analyze this contract clause and respond ONLY with either "
    "'Allowed' or 'Not Allowed': '{clause}'"
)

MODEL_CONFIDENCE = 0.9
NEUTRAL_CONFIDENCE = 0.5

_PREAMBLES = ("here's", "below is")


class CompletionClient(Protocol):
    """Text-completion collaborator. Both calls may raise."""

    async def prompt(self, text: str) -> str:
        ...

    async def chat(self, system_prompt: str, user_text: str) -> str:
        ...


def _is_preamble(line: str) -> bool:
    lowered = line.lstrip().lower()
    return (
        not line.strip()
        or "```" in line
        or "**" in line
        or line.startswith("#")
        or lowered.startswith(_PREAMBLES)
    )


def clean_response(text: str) -> str:
    """Drop leading blank, markdown and preamble lines, then trim."""
    lines = text.splitlines()
    start = 0
    while start < len(lines) and _is_preamble(lines[start]):
        start += 1
    return "\n".join(lines[start:]).strip()


def parse_verdict(response: str) -> Verdict:
    """Map a cleaned model response to a verdict."""
    lowered = response.lower()
    if "not allowed" in lowered:
        return Verdict.NOT_ALLOWED
    if "allowed" in lowered:
        return Verdict.ALLOWED
    return Verdict.UNCLASSIFIED


class ExternalModelClassifier:
    """Classifies clauses by asking the external language model."""

    def __init__(
        self,
        client: CompletionClient,
        min_words: int = 3,
        timeout: float = 30.0,
        max_concurrency: int = 1,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.client = client
        self.min_words = min_words
        self.timeout = timeout
        self.max_concurrency = max_concurrency

    async def _complete(self, clause: str) -> str:
        prompt = CLASSIFICATION_PROMPT.format(clause=clause)
        try:
            response = await asyncio.wait_for(self.client.prompt(prompt), self.timeout)
        except asyncio.TimeoutError as e:
            raise CollaboratorError(f"Model call timed out after {self.timeout}s") from e
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError(f"Model call failed: {e}") from e

        cleaned = clean_response(response or "")
        if not cleaned:
            raise CollaboratorError("Received empty response from language model")
        return cleaned

    async def classify(self, clause: str) -> ClauseVerdict:
        """Classify one clause; short clauses are Neutral without a model call."""
        if len(clause.split()) < self.min_words:
            return ClauseVerdict(
                clause=clause, label=Verdict.NEUTRAL, confidence=NEUTRAL_CONFIDENCE
            )

        response = await self._complete(clause)
        return ClauseVerdict(
            clause=clause, label=parse_verdict(response), confidence=MODEL_CONFIDENCE
        )

    async def classify_all(self, clauses: Iterable[str]) -> list[ClauseVerdict]:
        """
        Classify every clause, preserving order.

        Once a call fails no further calls are started. Calls already in
        flight finish, then the first failure (in clause order) is raised
        so the whole tier fails as a unit.
        """
        clauses = list(clauses)
        if not clauses:
            raise EmptyInputError()

        semaphore = asyncio.Semaphore(self.max_concurrency)
        failed = asyncio.Event()

        async def bounded(clause: str) -> ClauseVerdict | None:
            async with semaphore:
                if failed.is_set():
                    return None
                try:
                    return await self.classify(clause)
                except Exception:
                    failed.set()
                    raise

        results = await asyncio.gather(
            *(bounded(clause) for clause in clauses), return_exceptions=True
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.warning(
                "external_tier_calls_failed",
                failed=len(failures),
                skipped=sum(r is None for r in results),
                clauses=len(clauses),
            )
            raise failures[0]

        return list(results)
