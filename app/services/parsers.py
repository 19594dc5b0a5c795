"""
Leitura de arquivos tabulares (CSV e Excel).

Transforma o conteúdo bruto do arquivo em uma sequência de registros
(dicionários cabeçalho -> valor), sem nenhuma limpeza.
"""
import io
from pathlib import Path
from typing import Any, BinaryIO, Iterator

import pandas as pd

from app.config import ALLOWED_EXTENSIONS
from app.exceptions import UnsupportedFormatError

FILE_KINDS = {ext.lstrip(".") for ext in ALLOWED_EXTENSIONS}


def get_file_kind(filename: str) -> str:
    """
    Determina o tipo do arquivo a partir da extensão.

    Parâmetros:
        filename: Nome original do arquivo.

    Retorna:
        "csv", "xlsx" ou "xls".
    """
    extension = Path(filename).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedFormatError(extension)
    return extension[1:]


def parse_csv(buffer: BinaryIO) -> Iterator[dict[str, Any]]:
    """
    Lê um CSV usando a primeira linha como cabeçalho.

    Todos os valores são lidos como texto, como aparecem no arquivo;
    células vazias viram string vazia.
    """
    try:
        df = pd.read_csv(
            buffer,
            dtype=str,
            keep_default_na=False,
            encoding_errors="replace",
        )
    except pd.errors.EmptyDataError:
        return
    for record in df.to_dict(orient="records"):
        yield record


def parse_excel(buffer: BinaryIO) -> Iterator[dict[str, Any]]:
    """
    Lê apenas a primeira planilha de um arquivo Excel.

    Valores mantêm o tipo nativo do pandas (números, Timestamps);
    células vazias são omitidas do registro.
    """
    df = pd.read_excel(buffer, sheet_name=0)
    for record in df.to_dict(orient="records"):
        yield {
            key: value for key, value in record.items()
            if not (isinstance(value, float) and pd.isna(value)) and value is not pd.NaT
        }


PARSERS = {
    "csv": parse_csv,
    "xlsx": parse_excel,
    "xls": parse_excel,
}


def parse_file(content: bytes, file_kind: str) -> Iterator[dict[str, Any]]:
    """
    Converte o conteúdo de um arquivo em registros brutos.

    Parâmetros:
        content: Bytes do arquivo.
        file_kind: Tipo declarado do arquivo ("csv", "xlsx" ou "xls").

    Retorna:
        Iterador de registros cabeçalho -> valor bruto.
    """
    parser = PARSERS.get(file_kind)
    if parser is None:
        raise UnsupportedFormatError(f".{file_kind}")
    if not content:
        return iter(())
    return parser(io.BytesIO(content))
