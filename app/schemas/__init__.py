from app.schemas.dataset import (
    ColumnInfo,
    ColumnSummary,
    DatasetDataResponse,
    DatasetDetailResponse,
    DatasetResponse,
    Pagination,
    UploadResponse,
    UploadSummary,
)
from app.schemas.chart import (
    ChartPoint,
    ChartResponse,
    ChartSummary,
)
from app.schemas.analysis import (
    AnalysisResponse,
    AnalysisSummary,
    InsightUpdate,
)

__all__ = [
    "ColumnInfo",
    "ColumnSummary",
    "DatasetDataResponse",
    "DatasetDetailResponse",
    "DatasetResponse",
    "Pagination",
    "UploadResponse",
    "UploadSummary",
    "ChartPoint",
    "ChartResponse",
    "ChartSummary",
    "AnalysisResponse",
    "AnalysisSummary",
    "InsightUpdate",
]
