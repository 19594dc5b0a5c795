"""
Schemas Pydantic para as análises por IA.
"""
from typing import Any
from pydantic import BaseModel


class InsightUpdate(BaseModel):
    """Novo conteúdo de um insight."""
    title: str
    description: str = ""
    type: str = "insight"
    impact: str = "medium"
    recommendation: str = ""


class AnalysisSummary(BaseModel):
    id: int
    title: str | None
    status: str
    created_at: str
    updated_at: str


class AnalysisResponse(AnalysisSummary):
    dataset_id: int
    content: dict[str, Any]
