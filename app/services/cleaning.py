"""
Limpeza dos registros lidos dos arquivos.

- Remove valores nulos, vazios ou com o texto "null"
- Remove espaços das extremidades dos textos
- Sanitiza os nomes das colunas (apenas letras, dígitos e "_")
- Descarta registros que ficaram sem nenhum campo
"""
import re
from typing import Any, Iterable

from app.utils.values import Record, normalize_scalar

_INVALID_KEY_CHARS = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+", re.ASCII)


def sanitize_key(key: Any) -> str:
    """
    Sanitiza o nome de uma coluna.

    Parâmetros:
        key: Cabeçalho original da coluna.

    Retorna:
        Nome sem caracteres especiais, com espaços trocados por "_".
        Ex.: " Total (R$) de Vendas " -> "Total_R_de_Vendas"
    """
    key = str(key).strip()
    key = _INVALID_KEY_CHARS.sub("", key)
    return _WHITESPACE_RUN.sub("_", key)


def clean_value(value: Any) -> Any:
    """
    Normaliza um valor bruto.

    Retorna None quando o valor deve ser descartado.
    """
    value = normalize_scalar(value)
    if isinstance(value, str):
        value = value.strip()
        if value == "" or value.lower() == "null":
            return None
    return value


def clean_record(raw: dict[str, Any]) -> Record:
    cleaned: Record = {}
    for key, value in raw.items():
        value = clean_value(value)
        if value is None:
            continue
        clean_key = sanitize_key(key)
        # Cabeçalhos formados só por símbolos não geram coluna
        if not clean_key:
            continue
        cleaned[clean_key] = value
    return cleaned


def clean_records(raw_records: Iterable[dict[str, Any]]) -> list[Record]:
    """
    Limpa todos os registros preservando a ordem original.

    Parâmetros:
        raw_records: Registros brutos produzidos pelos parsers.

    Retorna:
        Lista de registros limpos; registros vazios são descartados.
    """
    cleaned = (clean_record(record) for record in raw_records)
    return [record for record in cleaned if record]
