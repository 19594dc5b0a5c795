from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from app.database import get_db
from app.services.analysis_service import AnalysisService
from app.services.type_inference import TypeInferenceService


def _upload(client, content: bytes, filename: str = "vendas.csv"):
    return client.post("/api/upload", files={"file": (filename, content, "text/csv")})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_upload_and_browse(client, sales_csv):
    response = _upload(client, sales_csv)
    assert response.status_code == 200
    body = response.json()
    dataset_id = body["dataset_id"]
    assert body["summary"]["total_rows"] == 3
    assert body["summary"]["total_columns"] == 4

    listed = client.get("/api/data").json()
    assert [d["id"] for d in listed] == [dataset_id]

    detail = client.get(f"/api/data/{dataset_id}").json()
    assert detail["name"] == "vendas"
    assert [c["column_name"] for c in detail["columns"]] == ["Region", "Total_R", "Order_Date", "Paid"]

    page = client.get(f"/api/data/{dataset_id}/data", params={"page": 1, "limit": 2}).json()
    assert len(page["data"]) == 2
    assert page["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}

    far = client.get(f"/api/data/{dataset_id}/data", params={"page": 10**17, "limit": 1000})
    assert far.status_code == 200
    assert far.json()["data"] == []


def test_upload_rejects_unsupported_format(client):
    response = _upload(client, b"hello", filename="notes.txt")
    assert response.status_code == 400


def test_upload_rejects_empty_file(client):
    response = _upload(client, b"a,b\n", filename="empty.csv")
    assert response.status_code == 400


def test_chart_endpoint(client, sales_csv):
    dataset_id = _upload(client, sales_csv).json()["dataset_id"]

    bar = client.get(f"/api/charts/{dataset_id}/bar", params={"x_axis": "Region", "y_axis": "Total_R"}).json()
    assert [(p["name"], p["value"]) for p in bar["data"]] == [("North", 13), ("South", 5)]
    assert bar["summary"]["x_axis"] == "Region"

    pie = client.get(f"/api/charts/{dataset_id}/pie").json()
    assert pie["summary"]["category_column"] == "Region"
    assert pie["data"][0] == {"name": "North", "value": 2, "x": None, "y": None}

    filtered = client.get(
        f"/api/charts/{dataset_id}/pie",
        params={"x_axis": "Region", "filters": json.dumps({"Paid": "no"})},
    ).json()
    assert [(p["name"], p["value"]) for p in filtered["data"]] == [("South", 1)]


def test_chart_endpoint_errors(client, sales_csv):
    dataset_id = _upload(client, sales_csv).json()["dataset_id"]
    assert client.get(f"/api/charts/{dataset_id}/scatter").status_code == 400
    assert client.get(f"/api/charts/{dataset_id}/bar", params={"filters": "{bad"}).status_code == 400
    assert client.get("/api/charts/999/bar").status_code == 404


def test_delete_dataset(client, sales_csv):
    dataset_id = _upload(client, sales_csv).json()["dataset_id"]

    assert client.delete(f"/api/data/{dataset_id}").status_code == 200
    assert client.get(f"/api/data/{dataset_id}").status_code == 404
    assert client.delete(f"/api/data/{dataset_id}").status_code == 404


def test_analysis_endpoints(client, sales_csv):
    dataset_id = _upload(client, sales_csv).json()["dataset_id"]

    from main import app

    db = next(app.dependency_overrides[get_db]())
    analysis_id = AnalysisService(db).save_analysis(
        dataset_id,
        {"title": "R", "insights": [{"id": "insight_1", "title": "a"}, {"id": "insight_2", "title": "b"}]},
    )
    db.close()

    context = client.get(f"/api/analysis/dataset/{dataset_id}/context").json()
    assert len(context["sample_data"]) == 3

    assert [a["id"] for a in client.get(f"/api/analysis/dataset/{dataset_id}").json()] == [analysis_id]

    updated = client.put(
        f"/api/analysis/{analysis_id}/insight/insight_1",
        json={"title": "Pergunta", "description": "Resposta"},
    ).json()
    assert updated["content"]["insights"][0]["title"] == "Pergunta"
    assert updated["content"]["insights"][0]["id"] == "insight_1"

    removed = client.delete(f"/api/analysis/{analysis_id}/insight/insight_2").json()
    assert [i["id"] for i in removed["content"]["insights"]] == ["insight_1"]

    assert client.get("/api/analysis/999").status_code == 404


def test_upload_rejects_corrupted_spreadsheet(client):
    response = _upload(client, b"definitely not a workbook", filename="broken.xlsx")
    assert response.status_code == 400
    assert client.get("/api/data").json() == []


def test_upload_does_not_mask_processing_bugs(client, sales_csv):
    with patch.object(TypeInferenceService, "infer_columns", side_effect=RuntimeError("bug")):
        with pytest.raises(RuntimeError):
            _upload(client, sales_csv)
