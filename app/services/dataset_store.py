"""
Persistência de datasets, colunas e linhas.

Cada operação de escrita é confirmada (commit) de forma independente; não
há transação envolvendo as três tabelas.
"""
import math
from datetime import datetime
from functools import wraps
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, StoreError
from app.models.analysis import Analysis
from app.models.dataset import Dataset, STATUS_COMPLETED
from app.models.dataset_column import DatasetColumn
from app.models.dataset_row import DatasetRow
from app.utils.logging import get_logger
from app.utils.values import Record

logger = get_logger(__name__)


def _store_operation(method):
    """Converte falhas do SQLAlchemy em StoreError, desfazendo a sessão."""

    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Falha no banco de dados em %s: %s", method.__name__, exc)
            raise StoreError(f"Falha no banco de dados em {method.__name__}") from exc

    return wrapper


def dataset_to_dict(dataset: Dataset) -> dict[str, Any]:
    return {
        "id": dataset.id,
        "name": dataset.name,
        "original_filename": dataset.original_filename,
        "file_type": dataset.file_type,
        "row_count": dataset.row_count,
        "column_count": dataset.column_count,
        "file_size": dataset.file_size,
        "status": dataset.status,
        "created_at": dataset.created_at.isoformat() if dataset.created_at else None
    }


def column_to_dict(column: DatasetColumn) -> dict[str, Any]:
    return {
        "id": column.id,
        "dataset_id": column.dataset_id,
        "column_name": column.column_name,
        "column_type": column.column_type,
        "is_filterable": column.is_filterable,
        "unique_values_count": column.unique_values_count
    }


def paginate(total: int, page: int, limit: int) -> dict[str, int]:
    """
    Calcula os metadados de paginação.

    Parâmetros:
        total: Total de linhas.
        page: Página (começa em 1).
        limit: Tamanho da página.

    Retorna:
        Dicionário com page, limit, total e total_pages.
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": total_pages
    }


class DatasetStore:
    """
    Repositório das tabelas datasets, dataset_columns e dataset_rows.

    Recebe a sessão do banco na construção.
    """

    def __init__(self, db: Session):
        self.db = db

    @_store_operation
    def create_dataset(
        self,
        name: str,
        original_filename: str,
        file_type: str,
        row_count: int,
        column_count: int,
        file_size: int | None = None
    ) -> int:
        """
        Cria o registro do dataset com status "completed".

        Retorna:
            ID do novo dataset.
        """
        dataset = Dataset(
            name=name,
            original_filename=original_filename,
            file_type=file_type,
            row_count=row_count,
            column_count=column_count,
            file_size=file_size,
            status=STATUS_COMPLETED,
            created_at=datetime.utcnow()
        )
        self.db.add(dataset)
        self.db.commit()
        self.db.refresh(dataset)
        return dataset.id

    @_store_operation
    def save_columns(self, dataset_id: int, columns: list[dict]) -> None:
        """
        Grava as colunas inferidas do dataset.

        Parâmetros:
            dataset_id: ID do dataset.
            columns: Saída de TypeInferenceService.infer_columns.
        """
        self.db.add_all([
            DatasetColumn(
                dataset_id=dataset_id,
                column_name=column["column_name"],
                column_type=column["column_type"],
                is_filterable=column["is_filterable"],
                unique_values_count=column["unique_values_count"]
            )
            for column in columns
        ])
        self.db.commit()

    @_store_operation
    def save_rows(self, dataset_id: int, rows: list[Record]) -> None:
        """
        Grava as linhas do dataset; row_index é a posição na lista.
        """
        self.db.add_all([
            DatasetRow(dataset_id=dataset_id, row_index=index, row_data=row)
            for index, row in enumerate(rows)
        ])
        self.db.commit()

    def _get_dataset_model(self, dataset_id: int) -> Dataset:
        dataset = self.db.query(Dataset).filter(Dataset.id == dataset_id).first()
        if not dataset:
            raise NotFoundError("Dataset", dataset_id)
        return dataset

    @_store_operation
    def get_dataset(self, dataset_id: int) -> dict[str, Any]:
        """
        Obtém o dataset com suas colunas, na ordem de inserção.
        """
        dataset = self._get_dataset_model(dataset_id)
        columns = (
            self.db.query(DatasetColumn)
            .filter(DatasetColumn.dataset_id == dataset_id)
            .order_by(DatasetColumn.id)
            .all()
        )
        result = dataset_to_dict(dataset)
        result["columns"] = [column_to_dict(column) for column in columns]
        return result

    def _rows_query(self, dataset_id: int):
        return (
            self.db.query(DatasetRow.row_data)
            .filter(DatasetRow.dataset_id == dataset_id)
            .order_by(DatasetRow.row_index)
        )

    @_store_operation
    def get_rows(self, dataset_id: int, limit: int | None = None) -> list[Record]:
        """
        Retorna os dados das linhas ordenados por row_index.

        Parâmetros:
            dataset_id: ID do dataset.
            limit: Quantidade máxima de linhas (None para todas).
        """
        query = self._rows_query(dataset_id)
        if limit is not None:
            query = query.limit(limit)
        return [row_data for (row_data,) in query.all()]

    @_store_operation
    def count_rows(self, dataset_id: int) -> int:
        return self.db.query(DatasetRow).filter(DatasetRow.dataset_id == dataset_id).count()

    @_store_operation
    def get_rows_page(self, dataset_id: int, page: int, limit: int) -> dict[str, Any]:
        """
        Retorna uma página das linhas do dataset.

        Páginas fora do intervalo retornam uma lista vazia.

        Retorna:
            Dicionário com data (linhas da página) e pagination.
        """
        total = self.count_rows(dataset_id)
        offset = (page - 1) * limit

        if offset < 0 or limit <= 0 or offset >= total:
            data = []
        else:
            data = [
                row_data for (row_data,)
                in self._rows_query(dataset_id).offset(offset).limit(min(limit, total)).all()
            ]

        return {"data": data, "pagination": paginate(total, page, limit)}

    @_store_operation
    def list_datasets(self) -> list[dict[str, Any]]:
        """
        Lista os datasets concluídos, do mais recente para o mais antigo.
        """
        datasets = (
            self.db.query(Dataset)
            .filter(Dataset.status == STATUS_COMPLETED)
            .order_by(Dataset.created_at.desc(), Dataset.id.desc())
            .all()
        )
        return [dataset_to_dict(dataset) for dataset in datasets]

    @_store_operation
    def delete_dataset(self, dataset_id: int) -> None:
        """
        Exclui as linhas, colunas e análises do dataset e depois o dataset.

        As exclusões são confirmadas em sequência, sem rollback das etapas
        já concluídas.
        """
        for model in (DatasetRow, DatasetColumn, Analysis):
            deleted = (
                self.db.query(model)
                .filter(model.dataset_id == dataset_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            logger.debug("%d registros removidos de %s", deleted, model.__tablename__)

        deleted = (
            self.db.query(Dataset)
            .filter(Dataset.id == dataset_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()

        if deleted == 0:
            raise NotFoundError("Dataset", dataset_id)
        logger.info("Dataset %s excluído", dataset_id)
