"""
Contract analysis service.

Wires the reference corpus, the classification tiers and the optional
language model into the operations exposed to the API and CLI.
"""

from functools import lru_cache

import structlog

from myguard.classification.external import CompletionClient, ExternalModelClassifier
from myguard.classification.orchestrator import TierOrchestrator
from myguard.classification.rules import RuleScorer
from myguard.classification.similarity import SimilarityClassifier
from myguard.config import Settings, get_settings
from myguard.corpus.corpus import LabeledCorpus
from myguard.corpus.loader import load_corpus
from myguard.exceptions import ModelNotConfiguredError
from myguard.models.report import AnalysisReport, ContractExplanation
from myguard.models.verdict import ClauseVerdict
from myguard.services.explanation_service import ExplanationService, contract_tips
from myguard.services.llm_service import LLMService

logger = structlog.get_logger(__name__)


class ContractAnalyzer:
    """
    Entry point for clause classification.

    The corpus is supplied at construction and never changes afterwards,
    so one analyzer can serve concurrent requests.
    """

    def __init__(
        self,
        corpus: LabeledCorpus,
        client: CompletionClient | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.settings = settings
        self.corpus = corpus
        self.client = client

        similarity = SimilarityClassifier(corpus, threshold=settings.similarity_threshold)
        external = None
        if client is not None:
            external = ExternalModelClassifier(
                client,
                min_words=settings.min_model_words,
                timeout=settings.llm_timeout,
                max_concurrency=settings.llm_max_concurrency,
            )

        self.orchestrator = TierOrchestrator(
            similarity=similarity,
            scorer=RuleScorer(similarity),
            external=external,
        )
        self._explainer = (
            ExplanationService(client, max_attempts=settings.llm_max_retries)
            if client is not None
            else None
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ContractAnalyzer":
        """Load the corpus and language model named by the settings."""
        settings = settings or get_settings()
        corpus = load_corpus(settings.dataset_path)

        client = None
        if settings.llm_configured:
            client = LLMService(settings)
        else:
            logger.info("llm_not_configured", tiers="heuristic,similarity")

        logger.info("analyzer_initialized", corpus_size=len(corpus), llm=client is not None)
        return cls(corpus, client=client, settings=settings)

    async def analyze_document(self, text: str) -> AnalysisReport:
        return await self.orchestrator.analyze_document(text)

    async def classify_clause(self, text: str) -> ClauseVerdict:
        return await self.orchestrator.classify_clause(text)

    def dataset_size(self) -> int:
        return len(self.corpus)

    async def explain_contract(self, text: str) -> ContractExplanation:
        if self._explainer is None:
            raise ModelNotConfiguredError()
        return await self._explainer.explain(text)

    def contract_tips(self) -> list[str]:
        return contract_tips()


@lru_cache()
def get_contract_analyzer() -> ContractAnalyzer:
    """Get cached analyzer instance."""
    return ContractAnalyzer.from_settings()
