from app.models.dataset import Dataset
from app.models.dataset_column import DatasetColumn
from app.models.dataset_row import DatasetRow
from app.models.analysis import Analysis

__all__ = ["Dataset", "DatasetColumn", "DatasetRow", "Analysis"]
