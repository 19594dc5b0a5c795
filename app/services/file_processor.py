"""
Serviço de ingestão de arquivos.

Fluxo: leitura (parsers) -> limpeza -> inferência de schema -> gravação
do dataset, das colunas e das linhas, nessa ordem.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Union

from sqlalchemy.orm import Session

from app.exceptions import EmptyDatasetError, PartialWriteError, StoreError
from app.services.cleaning import clean_records
from app.services.dataset_store import DatasetStore
from app.services.parsers import get_file_kind, parse_file
from app.services.type_inference import TypeInferenceService
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class FileDescriptor:
    """
    Arquivo a ser processado.

    source pode ser o conteúdo em bytes, um caminho local ou um objeto
    binário aberto (por exemplo, o arquivo de um UploadFile).
    """
    original_filename: str
    size: int | None
    source: Union[bytes, str, Path, BinaryIO]

    def read_bytes(self) -> bytes:
        if isinstance(self.source, bytes):
            return self.source
        if isinstance(self.source, (str, Path)):
            return Path(self.source).read_bytes()
        return self.source.read()


class FileProcessingService:
    """
    Serviço responsável por transformar um arquivo em um dataset persistido.
    """

    def __init__(self, db: Session, inference: TypeInferenceService | None = None):
        self.store = DatasetStore(db)
        self.inference = inference or TypeInferenceService()

    def process_file(self, file: FileDescriptor) -> dict[str, Any]:
        """
        Processa um arquivo CSV ou Excel.

        Parâmetros:
            file: Descritor do arquivo enviado.

        Retorna:
            Dicionário com dataset_id e summary (total de linhas, total de
            colunas e nome/tipo/valores únicos de cada coluna).
        """
        file_kind = get_file_kind(file.original_filename)
        logger.info("Processando arquivo %s", file.original_filename)

        records = clean_records(parse_file(file.read_bytes(), file_kind))
        if not records:
            raise EmptyDatasetError(file.original_filename)

        columns = self.inference.infer_columns(records)

        dataset_id = self.store.create_dataset(
            name=Path(file.original_filename).stem,
            original_filename=file.original_filename,
            file_type=file_kind,
            row_count=len(records),
            column_count=len(columns),
            file_size=file.size
        )
        self._save_children(dataset_id, columns, records)

        logger.info(
            "Dataset %s criado: %d linhas, %d colunas",
            dataset_id, len(records), len(columns)
        )

        return {
            "dataset_id": dataset_id,
            "summary": {
                "total_rows": len(records),
                "total_columns": len(columns),
                "columns": [
                    {
                        "name": column["column_name"],
                        "type": column["column_type"],
                        "unique_values": column["unique_values_count"]
                    }
                    for column in columns
                ]
            }
        }

    def _save_children(self, dataset_id: int, columns: list[dict], records: list[dict]) -> None:
        step = "columns"
        try:
            self.store.save_columns(dataset_id, columns)
            step = "rows"
            self.store.save_rows(dataset_id, records)
        except StoreError as exc:
            self._compensate(dataset_id)
            raise PartialWriteError(dataset_id, step) from exc

    def _compensate(self, dataset_id: int) -> None:
        """Remove o que já foi gravado de um dataset incompleto."""
        logger.warning("Removendo dataset %s gravado parcialmente", dataset_id)
        try:
            self.store.delete_dataset(dataset_id)
        except StoreError:
            logger.exception("Não foi possível remover o dataset parcial %s", dataset_id)
