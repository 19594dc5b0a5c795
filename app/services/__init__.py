from app.services.analysis_service import AnalysisService
from app.services.dataset_store import DatasetStore
from app.services.file_processor import FileDescriptor, FileProcessingService
from app.services.type_inference import TypeInferenceService

__all__ = [
    "AnalysisService",
    "DatasetStore",
    "FileDescriptor",
    "FileProcessingService",
    "TypeInferenceService",
]
