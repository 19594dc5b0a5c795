from __future__ import annotations

import io
from unittest.mock import patch

import pandas as pd
import pytest

from app.exceptions import EmptyDatasetError, PartialWriteError, StoreError, UnsupportedFormatError
from app.models import Dataset, DatasetColumn, DatasetRow
from app.services.file_processor import FileDescriptor, FileProcessingService
from app.services.type_inference import TypeInferenceService


def test_process_csv(db, store, sales_csv):
    result = FileProcessingService(db).process_file(
        FileDescriptor(original_filename="vendas.csv", size=len(sales_csv), source=sales_csv)
    )

    summary = result["summary"]
    assert summary["total_rows"] == 3
    assert summary["total_columns"] == 4
    assert summary["columns"] == [
        {"name": "Region", "type": "string", "unique_values": 2},
        {"name": "Total_R", "type": "number", "unique_values": 3},
        {"name": "Order_Date", "type": "date", "unique_values": 3},
        {"name": "Paid", "type": "boolean", "unique_values": 2},
    ]

    dataset = store.get_dataset(result["dataset_id"])
    assert dataset["name"] == "vendas"
    assert dataset["original_filename"] == "vendas.csv"
    assert dataset["file_type"] == "csv"
    assert dataset["file_size"] == len(sales_csv)
    assert dataset["row_count"] == 3
    assert store.get_rows(result["dataset_id"])[0] == {
        "Region": "North", "Total_R": "10", "Order_Date": "2024-01-01", "Paid": "yes"
    }


def test_process_excel_from_path(db, store, tmp_path):
    path = tmp_path / "report.xlsx"
    pd.DataFrame({
        "Product Name": ["Widget", "Gadget", "Gizmo"],
        "Units": [3, 4, 5],
        "Shipped": pd.to_datetime(["2024-01-01", "2024-01-02", "2024-01-03"]),
    }).to_excel(path, index=False)

    result = FileProcessingService(db).process_file(
        FileDescriptor(original_filename="report.xlsx", size=path.stat().st_size, source=path)
    )

    types = {c["name"]: c["type"] for c in result["summary"]["columns"]}
    assert types == {"Product_Name": "string", "Units": "number", "Shipped": "date"}
    rows = store.get_rows(result["dataset_id"])
    assert rows[0] == {"Product_Name": "Widget", "Units": 3, "Shipped": "2024-01-01"}


def test_process_file_object(db, sales_csv):
    result = FileProcessingService(db).process_file(
        FileDescriptor(original_filename="stream.csv", size=None, source=io.BytesIO(sales_csv))
    )
    assert result["summary"]["total_rows"] == 3


def test_unsupported_format(db):
    with pytest.raises(UnsupportedFormatError):
        FileProcessingService(db).process_file(
            FileDescriptor(original_filename="notes.txt", size=3, source=b"abc")
        )
    assert db.query(Dataset).count() == 0


@pytest.mark.parametrize("content", [b"", b"a,b\n", b"a,b\n , \nnull,NULL\n"])
def test_empty_dataset(db, content):
    with pytest.raises(EmptyDatasetError):
        FileProcessingService(db).process_file(
            FileDescriptor(original_filename="empty.csv", size=len(content), source=content)
        )
    assert db.query(Dataset).count() == 0


def test_legacy_column_discovery(db, store):
    content = b"a,b\n1,\n2,x\n"
    service = FileProcessingService(db, inference=TypeInferenceService(column_discovery="first_record"))
    result = service.process_file(FileDescriptor(original_filename="legacy.csv", size=None, source=content))

    assert [c["name"] for c in result["summary"]["columns"]] == ["a"]
    # As linhas mantêm todos os campos
    assert store.get_rows(result["dataset_id"])[1] == {"a": "2", "b": "x"}


def test_partial_write_is_compensated(db, sales_csv):
    service = FileProcessingService(db)
    with patch.object(service.store, "save_rows", side_effect=StoreError("falha")):
        with pytest.raises(PartialWriteError) as excinfo:
            service.process_file(
                FileDescriptor(original_filename="vendas.csv", size=None, source=sales_csv)
            )

    assert excinfo.value.step == "rows"
    assert isinstance(excinfo.value.__cause__, StoreError)
    assert db.query(Dataset).count() == 0
    assert db.query(DatasetColumn).count() == 0
    assert db.query(DatasetRow).count() == 0
