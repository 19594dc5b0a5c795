"""
Serviço de armazenamento das análises por IA.

Fornece ao gerador de relatórios os dados do dataset (informações,
colunas e amostra ordenada das linhas) e mantém os relatórios gerados.
A chamada ao modelo generativo fica fora deste serviço: o código que gera
os relatórios usa parse_analysis_response para ler a resposta do modelo e
save_analysis para gravar o relatório; nenhuma rota da API os chama.
"""
import copy
import json
import re
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import ANALYSIS_SAMPLE_SIZE
from app.exceptions import NotFoundError, StoreError
from app.models.analysis import Analysis
from app.services.dataset_store import DatasetStore
from app.utils.logging import get_logger

logger = get_logger(__name__)

_FENCED_JSON = re.compile(r"```json\s*\n(.*)\n\s*```", re.DOTALL)
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def empty_report() -> dict[str, Any]:
    """Relatório padrão quando a resposta do modelo não pôde ser lida."""
    return {
        "title": "Analysis Report",
        "summary": "Analysis completed successfully, but there was an issue "
                   "parsing the detailed insights.",
        "insights": [],
        "charts": [],
        "businessMetrics": {},
        "prosAndCons": {"pros": [], "cons": []},
        "recommendations": []
    }


def parse_analysis_response(text: str) -> dict[str, Any]:
    """
    Extrai o objeto JSON da resposta do modelo.

    Aceita um bloco ```json ... ``` ou o primeiro trecho entre chaves.

    Parâmetros:
        text: Texto retornado pelo modelo.

    Retorna:
        O relatório decodificado, ou empty_report() se não houver JSON válido.
    """
    match = _FENCED_JSON.search(text) or _JSON_OBJECT.search(text)
    if not match:
        logger.warning("Resposta da análise sem JSON")
        return empty_report()

    raw = match.group(1) if match.re is _FENCED_JSON else match.group(0)
    try:
        content = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Resposta da análise com JSON inválido: %s", exc)
        return empty_report()

    if not isinstance(content, dict):
        return empty_report()
    return content


class AnalysisService:
    """
    Serviço responsável pelos relatórios de análise de um dataset.
    """

    def __init__(self, db: Session):
        self.db = db
        self.store = DatasetStore(db)

    def get_dataset_for_analysis(
        self,
        dataset_id: int,
        sample_size: int = ANALYSIS_SAMPLE_SIZE
    ) -> dict[str, Any]:
        """
        Reúne o contexto do dataset para o gerador de relatórios.

        Retorna:
            Dicionário com info, columns, sample_data (primeiras linhas por
            row_index) e total_rows.
        """
        dataset = self.store.get_dataset(dataset_id)
        columns = dataset.pop("columns")
        return {
            "info": dataset,
            "columns": columns,
            "sample_data": self.store.get_rows(dataset_id, limit=sample_size),
            "total_rows": dataset["row_count"]
        }

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError("Falha ao gravar a análise") from exc

    def save_analysis(
        self,
        dataset_id: int,
        content: dict[str, Any],
        custom_prompt: dict[str, Any] | None = None
    ) -> int:
        """
        Grava um novo relatório para o dataset.

        Retorna:
            ID da análise criada.
        """
        self.store.get_dataset(dataset_id)

        now = datetime.utcnow()
        analysis = Analysis(
            dataset_id=dataset_id,
            title=content.get("title"),
            content=content,
            custom_prompt=json.dumps(custom_prompt) if custom_prompt is not None else None,
            status="completed",
            created_at=now,
            updated_at=now
        )
        self.db.add(analysis)
        self._commit()
        self.db.refresh(analysis)
        return analysis.id

    def _get_model(self, analysis_id: int) -> Analysis:
        analysis = self.db.query(Analysis).filter(Analysis.id == analysis_id).first()
        if not analysis:
            raise NotFoundError("Análise", analysis_id)
        return analysis

    def get_analysis(self, analysis_id: int) -> dict[str, Any]:
        analysis = self._get_model(analysis_id)
        return {
            "id": analysis.id,
            "dataset_id": analysis.dataset_id,
            "title": analysis.title,
            "content": analysis.content,
            "status": analysis.status,
            "created_at": analysis.created_at.isoformat(),
            "updated_at": analysis.updated_at.isoformat()
        }

    def list_analyses(self, dataset_id: int) -> list[dict[str, Any]]:
        """
        Lista as análises do dataset, da mais recente para a mais antiga.
        """
        analyses = (
            self.db.query(Analysis)
            .filter(Analysis.dataset_id == dataset_id)
            .order_by(Analysis.created_at.desc(), Analysis.id.desc())
            .all()
        )
        return [
            {
                "id": analysis.id,
                "title": analysis.title,
                "status": analysis.status,
                "created_at": analysis.created_at.isoformat(),
                "updated_at": analysis.updated_at.isoformat()
            }
            for analysis in analyses
        ]

    def _update_insights(self, analysis_id: int, update) -> dict[str, Any]:
        analysis = self._get_model(analysis_id)

        # Copia para que o SQLAlchemy detecte a alteração da coluna JSON
        content = copy.deepcopy(analysis.content)
        content["insights"] = update(content.get("insights", []))

        analysis.content = content
        analysis.updated_at = datetime.utcnow()
        self._commit()
        return content

    def update_insight(
        self,
        analysis_id: int,
        insight_id: str,
        insight: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Substitui um insight mantendo o seu id.

        Parâmetros:
            analysis_id: ID da análise.
            insight_id: ID do insight a substituir.
            insight: Novo conteúdo do insight.

        Retorna:
            Conteúdo atualizado da análise.
        """
        def replace(insights):
            if not any(item.get("id") == insight_id for item in insights):
                raise NotFoundError("Insight", insight_id)
            return [
                {**insight, "id": insight_id} if item.get("id") == insight_id else item
                for item in insights
            ]

        return self._update_insights(analysis_id, replace)

    def delete_insight(self, analysis_id: int, insight_id: str) -> dict[str, Any]:
        """
        Remove um insight da análise.

        Retorna:
            Conteúdo atualizado da análise.
        """
        return self._update_insights(
            analysis_id,
            lambda insights: [item for item in insights if item.get("id") != insight_id]
        )
