"""
Serviço de agregação de dados para gráficos.

Transforma as linhas de um dataset em séries prontas para renderização:
- bar/line/area: soma de Y agrupada por X (top 20)
- pie: contagem por categoria (top 10)
"""
from typing import Any

from app.config import PIE_CHART_LIMIT, XY_CHART_LIMIT
from app.utils.logging import get_logger
from app.utils.values import Record, is_null, is_numeric, parse_leading_number, stringify

logger = get_logger(__name__)

XY_CHART_TYPES = {"bar", "line", "area"}
PIE_CHART_TYPE = "pie"
CHART_TYPES = XY_CHART_TYPES | {PIE_CHART_TYPE}

UNKNOWN_CATEGORY = "Unknown"


def _first_row_columns(data: list[Record]) -> list[str]:
    return list(data[0].keys()) if data else []


def select_x_axis(data: list[Record]) -> str | None:
    """Eixo X padrão: primeira coluna da primeira linha."""
    columns = _first_row_columns(data)
    return columns[0] if columns else None


def select_y_axis(data: list[Record]) -> str | None:
    """
    Eixo Y padrão: primeira coluna cujo valor na primeira linha é numérico;
    se não houver, a segunda coluna.
    """
    columns = _first_row_columns(data)
    for column in columns:
        if is_numeric(data[0][column]):
            return column
    return columns[1] if len(columns) > 1 else None


def select_category_column(data: list[Record]) -> str | None:
    """
    Categoria padrão do gráfico de pizza: primeira coluna cujo valor na
    primeira linha não é numérico nem nulo; se não houver, a primeira coluna.
    """
    columns = _first_row_columns(data)
    for column in columns:
        value = data[0][column]
        if not is_null(value) and not is_numeric(value):
            return column
    return columns[0] if columns else None


def category_label(value: Any) -> str:
    """Rótulo de agrupamento; valores ausentes viram "Unknown"."""
    label = stringify(value)
    return label if label else UNKNOWN_CATEGORY


def apply_filters(data: list[Record], filters: dict[str, Any] | None) -> list[Record]:
    """
    Filtra as linhas por substring, sem diferenciar maiúsculas.

    Filtros vazios ou com valor "all" são ignorados.

    Parâmetros:
        data: Linhas do dataset.
        filters: Mapeamento coluna -> valor procurado.

    Retorna:
        Linhas que atendem a todos os filtros.
    """
    for column, value in (filters or {}).items():
        if value is None or value == "" or value == "all":
            continue
        needle = stringify(value).lower()
        data = [row for row in data if needle in stringify(row.get(column)).lower()]
    return data


def _empty_result(summary: dict[str, Any]) -> dict[str, Any]:
    return {"data": [], "summary": {"total": 0, "categories": 0, **summary}}


def generate_xy_chart_data(
    data: list[Record],
    x_axis: str | None = None,
    y_axis: str | None = None,
    limit: int = XY_CHART_LIMIT
) -> dict[str, Any]:
    """
    Agrupa as linhas por X somando os valores de Y.

    Y é lido pelo número no início do valor ("12 kg" -> 12); valores sem
    número ou ausentes contam como 0.

    Retorna:
        Dicionário com data (pontos x, y, name, value ordenados por valor
        decrescente) e summary (total, categories, x_axis, y_axis).
    """
    x_axis = x_axis or select_x_axis(data)
    y_axis = y_axis or select_y_axis(data)

    grouped: dict[str, float] = {}
    for row in data:
        x_value = category_label(row.get(x_axis) if x_axis else None)
        y_value = parse_leading_number(row.get(y_axis)) if y_axis else 0.0
        grouped[x_value] = grouped.get(x_value, 0.0) + y_value

    points = sorted(grouped.items(), key=lambda item: item[1], reverse=True)[:limit]
    chart_data = [{"x": x, "y": y, "name": x, "value": y} for x, y in points]

    return {
        "data": chart_data,
        "summary": {
            "total": sum(point["y"] for point in chart_data),
            "categories": len(chart_data),
            "x_axis": x_axis,
            "y_axis": y_axis
        }
    }


def generate_pie_chart_data(
    data: list[Record],
    category_column: str | None = None,
    limit: int = PIE_CHART_LIMIT
) -> dict[str, Any]:
    """
    Conta as ocorrências de cada categoria.

    Retorna:
        Dicionário com data (fatias name, value ordenadas por contagem
        decrescente) e summary (total de linhas, categories, category_column).
    """
    category_column = category_column or select_category_column(data)

    counts: dict[str, int] = {}
    for row in data:
        category = category_label(row.get(category_column) if category_column else None)
        counts[category] = counts.get(category, 0) + 1

    slices = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    chart_data = [{"name": name, "value": value} for name, value in slices]

    return {
        "data": chart_data,
        "summary": {
            "total": len(data),
            "categories": len(chart_data),
            "category_column": category_column
        }
    }


def generate_chart_data(
    data: list[Record],
    chart_type: str,
    x_axis: str | None = None,
    y_axis: str | None = None
) -> dict[str, Any]:
    """
    Gera os dados de um gráfico a partir das linhas do dataset.

    Parâmetros:
        data: Linhas (possivelmente já filtradas).
        chart_type: bar, line, area ou pie.
        x_axis: Coluna do eixo X (ou da categoria, no gráfico de pizza).
        y_axis: Coluna do eixo Y (ignorada no gráfico de pizza).

    Retorna:
        Dicionário com data e summary.
    """
    if chart_type == PIE_CHART_TYPE:
        if not data:
            return _empty_result({"category_column": x_axis})
        return generate_pie_chart_data(data, x_axis)

    if chart_type in XY_CHART_TYPES:
        if not data:
            return _empty_result({"x_axis": x_axis, "y_axis": y_axis})
        return generate_xy_chart_data(data, x_axis, y_axis)

    logger.warning("Tipo de gráfico desconhecido: %s", chart_type)
    return _empty_result({})
