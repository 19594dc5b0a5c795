"""
Configurações centralizadas da aplicação.

Os valores podem ser sobrescritos por variáveis de ambiente (ou por um
arquivo .env na raiz do projeto).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/dashboard.db")

ALLOWED_EXTENSIONS = {".csv", ".xlsx", ".xls"}
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "50"))

# Inferência de schema
INFERENCE_SAMPLE_SIZE = 500
FILTERABLE_RATIO = 0.8
# "sample": união das chaves da amostra; "first_record": apenas o primeiro registro
COLUMN_DISCOVERY = os.getenv("COLUMN_DISCOVERY", "sample")

# Gráficos
XY_CHART_LIMIT = 20
PIE_CHART_LIMIT = 10

# Amostra de linhas entregue à análise por IA
ANALYSIS_SAMPLE_SIZE = 100

DEFAULT_PAGE_SIZE = 1000

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
