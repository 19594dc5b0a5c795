from __future__ import annotations

import pytest

from app.services.type_inference import (
    TypeInferenceService,
    classify_values,
    matches_type,
)


@pytest.mark.parametrize("values, expected", [
    (["1", "2", "3.5", ""], "number"),
    (["2024-01-01", "2024-02-01"], "date"),
    (["yes", "no", "1"], "boolean"),
    (["apple", "banana"], "string"),
    ([True, False], "boolean"),
    ([1, 2.5, "3"], "number"),
    (["10", "abc"], "string"),
    (["1st", "2nd"], "string"),
    (["May", "June"], "string"),
    (["now", "today"], "string"),
    (["2024-01-01", "May"], "string"),
])
def test_classify_values(values, expected):
    assert classify_values(values) == expected


def test_numeric_wins_over_boolean():
    assert classify_values(["0", "1", "1"]) == "number"


def test_infer_columns_schema():
    cities = ["alpha", "beta", "gamma"]
    records = [{"city": cities[i % 3], "amount": str(i), "when": "2024-01-01"} for i in range(10)]
    columns = TypeInferenceService().infer_columns(records)

    assert [c["column_name"] for c in columns] == ["city", "amount", "when"]
    by_name = {c["column_name"]: c for c in columns}
    assert by_name["city"]["column_type"] == "string"
    assert by_name["city"]["unique_values_count"] == 3
    assert by_name["city"]["is_filterable"] is True
    assert by_name["amount"]["column_type"] == "number"
    assert by_name["amount"]["unique_values_count"] == 10
    assert by_name["amount"]["is_filterable"] is False
    assert by_name["when"]["column_type"] == "date"


def test_filterable_uses_full_record_count():
    # 5 valores distintos na amostra, 100 registros no total
    records = [{"code": str(i)} for i in range(5)] + [{"code": "0"}] * 95
    columns = TypeInferenceService(sample_size=5).infer_columns(records)
    assert columns[0]["unique_values_count"] == 5
    assert columns[0]["is_filterable"] is True


def test_sample_limits_classification():
    records = [{"value": "1"}] * 3 + [{"value": "text"}]
    assert TypeInferenceService(sample_size=3).infer_columns(records)[0]["column_type"] == "number"
    assert TypeInferenceService(sample_size=4).infer_columns(records)[0]["column_type"] == "string"


def test_column_discovery_modes():
    records = [{"a": "1"}, {"a": "2", "b": "x"}]

    union = TypeInferenceService(column_discovery="sample").infer_columns(records)
    assert [c["column_name"] for c in union] == ["a", "b"]

    legacy = TypeInferenceService(column_discovery="first_record").infer_columns(records)
    assert [c["column_name"] for c in legacy] == ["a"]


def test_invalid_discovery_mode():
    with pytest.raises(ValueError):
        TypeInferenceService(column_discovery="all")


def test_inference_is_idempotent():
    records = [{"a": "1", "b": "yes", "c": "hello"}, {"a": "2", "b": "no", "c": "world"}]
    service = TypeInferenceService()
    assert service.infer_columns(records) == service.infer_columns(records)


def test_empty_records():
    assert TypeInferenceService().infer_columns([]) == []


def test_validate_record():
    columns = [
        {"column_name": "amount", "column_type": "number"},
        {"column_name": "paid", "column_type": "boolean"},
        {"column_name": "name", "column_type": "string"},
    ]
    service = TypeInferenceService()
    assert service.validate_record({"amount": "10", "paid": "yes", "name": "x"}, columns) == []
    assert service.validate_record({"amount": "ten", "paid": "maybe"}, columns) == ["amount", "paid"]
    assert matches_type(None, "number")
