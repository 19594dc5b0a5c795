"""
Schemas Pydantic para validação de dados de datasets.
"""
from typing import Any, Optional
from pydantic import BaseModel


class ColumnInfo(BaseModel):
    """Coluna inferida de um dataset."""
    id: int
    dataset_id: int
    column_name: str
    column_type: str
    is_filterable: bool
    unique_values_count: int


class DatasetResponse(BaseModel):
    """Informações de um dataset."""
    id: int
    name: str
    original_filename: str
    file_type: str
    row_count: int
    column_count: int
    file_size: Optional[int] = None
    status: str
    created_at: Optional[str] = None


class DatasetDetailResponse(DatasetResponse):
    """Dataset com suas colunas."""
    columns: list[ColumnInfo]


class ColumnSummary(BaseModel):
    """Resumo de uma coluna após a ingestão."""
    name: str
    type: str
    unique_values: int


class UploadSummary(BaseModel):
    total_rows: int
    total_columns: int
    columns: list[ColumnSummary]


class UploadResponse(BaseModel):
    """Resposta do upload de um arquivo."""
    message: str
    dataset_id: int
    summary: UploadSummary


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class DatasetDataResponse(BaseModel):
    """Página de linhas de um dataset."""
    data: list[dict[str, Any]]
    pagination: Pagination
