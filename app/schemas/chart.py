"""
Schemas Pydantic para os dados de gráficos.
"""
from typing import Optional
from pydantic import BaseModel


class ChartPoint(BaseModel):
    """Ponto de um gráfico. x e y só existem nos gráficos XY."""
    name: str
    value: float
    x: Optional[str] = None
    y: Optional[float] = None


class ChartSummary(BaseModel):
    total: float
    categories: int = 0
    x_axis: Optional[str] = None
    y_axis: Optional[str] = None
    category_column: Optional[str] = None


class ChartResponse(BaseModel):
    data: list[ChartPoint]
    summary: ChartSummary
