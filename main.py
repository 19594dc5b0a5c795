"""
Aplicação principal do painel de dados.

Inicializa o servidor FastAPI com as rotas de upload, datasets, gráficos
e análises.
"""
from fastapi import FastAPI

from app.config import LOG_LEVEL
from app.database import init_db
from app.routers import (
    upload_router,
    datasets_router,
    charts_router,
    analysis_router
)
from app.utils.logging import setup_logging

app = FastAPI(
    title="Data Dashboard",
    description="Ingestão de arquivos tabulares, inferência de schema e dados para gráficos",
    version="1.0.0"
)


# Inicializa logging e banco de dados na startup
@app.on_event("startup")
def startup_event():
    """Configura o logging e cria as tabelas ao iniciar a aplicação."""
    setup_logging(LOG_LEVEL)
    init_db()


# Registra routers da API
app.include_router(upload_router)
app.include_router(datasets_router)
app.include_router(charts_router)
app.include_router(analysis_router)


@app.get("/health")
def health():
    """Verificação simples de disponibilidade."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
