"""
Plain-language contract explanations and review tips.
"""

import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from myguard.classification.external import CompletionClient, clean_response
from myguard.exceptions import CollaboratorError, EmptyInputError
from myguard.models.report import ContractExplanation

logger = structlog.get_logger(__name__)

CONTRACT_TIPS: tuple[str, ...] = (
    "Always read the entire contract before signing",
    "Pay attention to termination clauses and notice periods",
    "Look for clauses that limit liability or rights",
    "Watch for automatic renewal terms",
    "Understand payment terms and late fee structures",
)

SUMMARY_PROMPT = "Provide a brief 2-3 sentence summary of this contract clause: '{text}'"
KEY_POINTS_PROMPT = (
    "List 3 key points from this contract clause as short bullet points "
    "without explanations: '{text}'"
)
RECOMMENDATIONS_PROMPT = "Provide 1-2 recommendations regarding this contract clause: '{text}'"

_BULLET_CHARS = "-*• "


def contract_tips() -> list[str]:
    """General advice for reviewing a contract."""
    return list(CONTRACT_TIPS)


def parse_key_points(text: str) -> list[str]:
    """Split a bulleted response into points, stripping bullet markers."""
    points = []
    for line in text.splitlines():
        point = line.lstrip(_BULLET_CHARS).strip()
        if point:
            points.append(point)
    return points


class ExplanationService:
    """Builds contract explanations from three completion prompts."""

    def __init__(self, client: CompletionClient, max_attempts: int = 3):
        self.client = client
        self.max_attempts = max_attempts

    async def _ask(self, prompt: str) -> str:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            retry=retry_if_exception_type(CollaboratorError),
            reraise=True,
        ):
            with attempt:
                try:
                    response = await self.client.prompt(prompt)
                except CollaboratorError:
                    raise
                except Exception as e:
                    raise CollaboratorError(f"Model call failed: {e}") from e

                cleaned = clean_response(response or "")
                if not cleaned:
                    raise CollaboratorError("Received empty response from language model")
        return cleaned

    async def explain(self, contract_text: str) -> ContractExplanation:
        if not contract_text or not contract_text.strip():
            raise EmptyInputError("Empty contract text received")

        summary = await self._ask(SUMMARY_PROMPT.format(text=contract_text))
        key_points = await self._ask(KEY_POINTS_PROMPT.format(text=contract_text))
        recommendations = await self._ask(RECOMMENDATIONS_PROMPT.format(text=contract_text))

        explanation = ContractExplanation(
            summary=summary,
            key_points=parse_key_points(key_points),
            recommendations=recommendations,
        )
        logger.info("contract_explained", key_points=len(explanation.key_points))
        return explanation
