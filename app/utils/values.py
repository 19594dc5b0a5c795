"""
Funções auxiliares para os valores escalares das linhas.

As linhas são mapeamentos abertos coluna -> valor, onde o valor pode ser
texto, número, booleano, data (em ISO-8601) ou nulo.
"""
import math
import re
import warnings
from datetime import date, datetime, time
from typing import Any, Union

import numpy as np
import pandas as pd

Scalar = Union[str, int, float, bool, None]
Record = dict[str, Scalar]

NUMERIC_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
BOOLEAN_LITERALS = {"true", "false", "yes", "no", "0", "1"}
LEADING_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_DIGIT = re.compile(r"\d")
_ORDINAL = re.compile(r"^\d+(?:st|nd|rd|th)$", re.IGNORECASE)
_RELATIVE_DATE_WORDS = re.compile(r"\b(?:now|today|tomorrow|yesterday)\b", re.IGNORECASE)


def is_null(value: Any) -> bool:
    """Verifica se o valor é nulo (None, NaN ou NaT)."""
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def to_number(value: Any) -> float | None:
    """
    Converte o valor em float quando ele representa um número.

    Booleanos não são considerados numéricos. Textos precisam ser um
    literal numérico completo ("12", "-3.5", "1e3"); "12abc" retorna None.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str):
        text = value.strip()
        if NUMERIC_PATTERN.match(text):
            return float(text)
    return None


def is_numeric(value: Any) -> bool:
    return to_number(value) is not None


def parse_leading_number(value: Any) -> float:
    """
    Lê o número no início do valor; retorna 0 quando não há número.

    Ex.: "12 kg" -> 12.0, "1,200" -> 1.0, "abc" -> 0.0
    """
    number = to_number(value)
    if number is not None:
        return number
    if isinstance(value, str):
        match = LEADING_NUMBER_PATTERN.match(value.strip())
        if match:
            return float(match.group(0))
    return 0.0


def is_date(value: Any) -> bool:
    """
    Verifica se o valor pode ser interpretado como uma data.

    Textos sem nenhum dígito ("May", "now"), ordinais ("1st") e datas
    relativas ("today") não são datas.
    """
    if isinstance(value, (datetime, date)):
        return True
    if not isinstance(value, str) or not _DIGIT.search(value):
        return False
    if _ORDINAL.match(value.strip()) or _RELATIVE_DATE_WORDS.search(value):
        return False
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(value.strip())
    except (ValueError, TypeError, OverflowError):
        return False
    return parsed is not pd.NaT


def is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return stringify(value).lower() in BOOLEAN_LITERALS


def stringify(value: Any) -> str:
    """
    Converte o valor em texto para agrupamentos e filtros.

    Floats inteiros perdem a parte decimal (5.0 -> "5") e booleanos viram
    "true"/"false".
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_scalar(value: Any) -> Scalar:
    """
    Converte valores vindos do pandas/numpy em escalares nativos do Python.

    Datas são convertidas para ISO-8601 para que as linhas possam ser
    gravadas como JSON. Valores nulos retornam None.
    """
    if is_null(value):
        return None
    if isinstance(value, np.generic):
        value = value.item()
        if is_null(value):
            return None
    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()
    if isinstance(value, datetime):
        if value.time() == time(0, 0) and value.tzinfo is None:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
