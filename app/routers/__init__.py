from app.routers.upload import router as upload_router
from app.routers.datasets import router as datasets_router
from app.routers.charts import router as charts_router
from app.routers.analysis import router as analysis_router

__all__ = [
    "upload_router",
    "datasets_router",
    "charts_router",
    "analysis_router"
]
