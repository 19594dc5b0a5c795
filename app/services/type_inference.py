"""
Serviço de inferência de schema.

Classifica cada coluna em um dos tipos string, number, date ou boolean a
partir de uma amostra das linhas e calcula estatísticas de cardinalidade.
"""
from typing import Any

from app.config import COLUMN_DISCOVERY, FILTERABLE_RATIO, INFERENCE_SAMPLE_SIZE
from app.utils.values import Record, is_boolean, is_date, is_numeric

TYPE_STRING = "string"
TYPE_NUMBER = "number"
TYPE_DATE = "date"
TYPE_BOOLEAN = "boolean"

COLUMN_TYPES = (TYPE_STRING, TYPE_NUMBER, TYPE_DATE, TYPE_BOOLEAN)


def _is_empty_or(check):
    return lambda value: value == "" or check(value)


# Ordem de prioridade: number > date > boolean > string
TYPE_CHECKS = (
    (TYPE_NUMBER, _is_empty_or(is_numeric)),
    (TYPE_DATE, _is_empty_or(is_date)),
    (TYPE_BOOLEAN, is_boolean),
)


def classify_values(values: list[Any]) -> str:
    """
    Classifica uma lista de valores de uma coluna.

    Parâmetros:
        values: Valores não nulos da coluna na amostra.

    Retorna:
        O primeiro tipo da cadeia de prioridade aceito por todos os valores,
        ou "string".
    """
    for column_type, check in TYPE_CHECKS:
        if all(check(value) for value in values):
            return column_type
    return TYPE_STRING


def matches_type(value: Any, column_type: str) -> bool:
    """Verifica se um valor é compatível com o tipo inferido da coluna."""
    if value is None or column_type == TYPE_STRING:
        return True
    for candidate, check in TYPE_CHECKS:
        if candidate == column_type:
            return check(value)
    return False


def _distinct_key(value: Any) -> tuple:
    # 1, 1.0 e True são valores distintos nas linhas
    return (type(value).__name__, value)


class TypeInferenceService:
    """
    Serviço responsável por inferir o schema de um conjunto de registros.
    """

    def __init__(
        self,
        sample_size: int = INFERENCE_SAMPLE_SIZE,
        filterable_ratio: float = FILTERABLE_RATIO,
        column_discovery: str = COLUMN_DISCOVERY
    ):
        if column_discovery not in ("sample", "first_record"):
            raise ValueError(f"Modo de descoberta de colunas desconhecido: {column_discovery}")
        self.sample_size = sample_size
        self.filterable_ratio = filterable_ratio
        self.column_discovery = column_discovery

    def discover_columns(self, sample: list[Record]) -> list[str]:
        """
        Descobre os nomes das colunas.

        No modo "first_record" apenas as chaves do primeiro registro são
        usadas; no modo "sample" as chaves de toda a amostra são unidas,
        na ordem em que aparecem.
        """
        if not sample:
            return []
        if self.column_discovery == "first_record":
            return list(sample[0].keys())

        names: dict[str, None] = {}
        for record in sample:
            for key in record:
                names.setdefault(key, None)
        return list(names)

    def infer_columns(self, records: list[Record]) -> list[dict]:
        """
        Infere o schema das colunas.

        Parâmetros:
            records: Registros já limpos, na ordem original.

        Retorna:
            Lista de dicionários com column_name, column_type,
            is_filterable e unique_values_count.
        """
        if not records:
            return []

        sample = records[:self.sample_size]
        total = len(records)
        columns = []

        for column_name in self.discover_columns(sample):
            values = [
                record[column_name] for record in sample
                if record.get(column_name) is not None
            ]
            unique_count = len({_distinct_key(value) for value in values})

            columns.append({
                "column_name": column_name,
                "column_type": classify_values(values),
                # Compara com o total de registros, não com a amostra
                "is_filterable": unique_count < total * self.filterable_ratio,
                "unique_values_count": unique_count
            })

        return columns

    def validate_record(self, record: Record, columns: list[dict]) -> list[str]:
        """
        Valida um registro contra o schema inferido.

        Retorna:
            Nomes das colunas cujo valor não é compatível com o tipo.
        """
        return [
            column["column_name"] for column in columns
            if not matches_type(record.get(column["column_name"]), column["column_type"])
        ]
