"""
Rotas para consulta e edição das análises por IA.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError
from app.schemas.analysis import AnalysisResponse, AnalysisSummary, InsightUpdate
from app.services.analysis_service import AnalysisService

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.get("/dataset/{dataset_id}", response_model=list[AnalysisSummary])
def list_analyses(dataset_id: int, db: Session = Depends(get_db)):
    """
    Lista as análises de um dataset.
    """
    return AnalysisService(db).list_analyses(dataset_id)


@router.get("/dataset/{dataset_id}/context")
def get_analysis_context(dataset_id: int, db: Session = Depends(get_db)):
    """
    Retorna o contexto usado pelo gerador de relatórios: informações do
    dataset, colunas e a amostra ordenada das linhas.
    """
    try:
        return AnalysisService(db).get_dataset_for_analysis(dataset_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Dataset não encontrado")


@router.get("/{analysis_id}", response_model=AnalysisResponse)
def get_analysis(analysis_id: int, db: Session = Depends(get_db)):
    """
    Obtém uma análise específica.
    """
    try:
        return AnalysisService(db).get_analysis(analysis_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Análise não encontrada")


@router.put("/{analysis_id}/insight/{insight_id}")
def update_insight(
    analysis_id: int,
    insight_id: str,
    insight: InsightUpdate,
    db: Session = Depends(get_db)
):
    """
    Substitui o conteúdo de um insight.

    Parâmetros:
        analysis_id: ID da análise.
        insight_id: ID do insight.
        insight: Novo conteúdo.
    """
    try:
        content = AnalysisService(db).update_insight(analysis_id, insight_id, insight.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Insight atualizado com sucesso", "content": content}


@router.delete("/{analysis_id}/insight/{insight_id}")
def delete_insight(analysis_id: int, insight_id: str, db: Session = Depends(get_db)):
    """
    Remove um insight de uma análise.
    """
    try:
        content = AnalysisService(db).delete_insight(analysis_id, insight_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {"message": "Insight removido com sucesso", "content": content}
