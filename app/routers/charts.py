"""
Rotas para geração dos dados de gráficos.
"""
import json
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.exceptions import NotFoundError
from app.schemas.chart import ChartResponse
from app.services.chart_service import CHART_TYPES, apply_filters, generate_chart_data
from app.services.dataset_store import DatasetStore

router = APIRouter(prefix="/api/charts", tags=["charts"])


@router.get("/{dataset_id}/{chart_type}", response_model=ChartResponse)
def get_chart_data(
    dataset_id: int,
    chart_type: str,
    x_axis: Optional[str] = None,
    y_axis: Optional[str] = None,
    filters: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Gera os dados de um gráfico para o dataset.

    Parâmetros:
        dataset_id: ID do dataset.
        chart_type: bar, line, area ou pie.
        x_axis: Coluna do eixo X (categoria no gráfico de pizza).
        y_axis: Coluna do eixo Y.
        filters: Objeto JSON coluna -> valor aplicado antes da agregação.

    Retorna:
        Pontos do gráfico e resumo com os eixos utilizados.
    """
    if chart_type not in CHART_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Tipo de gráfico inválido. Use: {', '.join(sorted(CHART_TYPES))}"
        )

    try:
        parsed_filters = json.loads(filters) if filters else {}
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Filtros inválidos")
    if not isinstance(parsed_filters, dict):
        raise HTTPException(status_code=400, detail="Filtros inválidos")

    store = DatasetStore(db)
    try:
        store.get_dataset(dataset_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Dataset não encontrado")

    data = apply_filters(store.get_rows(dataset_id), parsed_filters)
    return generate_chart_data(data, chart_type, x_axis, y_axis)
