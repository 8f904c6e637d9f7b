"""API routes for clause classification."""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from myguard.models.report import AnalysisReport, ContractExplanation
from myguard.models.verdict import ClauseVerdict
from myguard.services.analysis_service import ContractAnalyzer, get_contract_analyzer

router = APIRouter(tags=["analysis"])


def get_analyzer(request: Request) -> ContractAnalyzer:
    """Analyzer built at startup, or the cached default."""
    analyzer = getattr(request.app.state, "analyzer", None)
    return analyzer if analyzer is not None else get_contract_analyzer()


# === Pydantic Models ===

class AnalyzeRequest(BaseModel):
    """Contract text to analyze."""
    text: str = Field(..., description="Full contract text")


class ClassifyRequest(BaseModel):
    """A single clause to classify."""
    clause: str


class ExplainRequest(BaseModel):
    """Contract excerpt to explain."""
    text: str


class DatasetSizeResponse(BaseModel):
    dataset_size: int


class TipsResponse(BaseModel):
    tips: list[str]


# === Endpoints ===

@router.post("/analyze", response_model=AnalysisReport)
async def analyze_document(
    body: AnalyzeRequest, analyzer: ContractAnalyzer = Depends(get_analyzer)
) -> AnalysisReport:
    """Classify every clause of a contract and summarise the verdicts."""
    return await analyzer.analyze_document(body.text)


@router.post("/classify", response_model=ClauseVerdict)
async def classify_clause(
    body: ClassifyRequest, analyzer: ContractAnalyzer = Depends(get_analyzer)
) -> ClauseVerdict:
    """Classify one clause."""
    return await analyzer.classify_clause(body.clause)


@router.get("/dataset/size", response_model=DatasetSizeResponse)
async def dataset_size(analyzer: ContractAnalyzer = Depends(get_analyzer)) -> DatasetSizeResponse:
    return DatasetSizeResponse(dataset_size=analyzer.dataset_size())


@router.post("/explain", response_model=ContractExplanation)
async def explain_contract(
    body: ExplainRequest, analyzer: ContractAnalyzer = Depends(get_analyzer)
) -> ContractExplanation:
    """Summarise a contract excerpt with key points and recommendations."""
    return await analyzer.explain_contract(body.text)


@router.get("/tips", response_model=TipsResponse)
async def tips(analyzer: ContractAnalyzer = Depends(get_analyzer)) -> TipsResponse:
    return TipsResponse(tips=analyzer.contract_tips())
