"""
Business logic services for MyGuard.
"""

from myguard.services.analysis_service import ContractAnalyzer, get_contract_analyzer
from myguard.services.explanation_service import ExplanationService, contract_tips
from myguard.services.llm_service import LLMService

__all__ = [
    "ContractAnalyzer",
    "get_contract_analyzer",
    "ExplanationService",
    "contract_tips",
    "LLMService",
]
