import io

import pytest

import row_analyzer_web.web as webmod
from row_analyzer.config import AnalysisConfig
from row_analyzer.engine import Engine
from row_analyzer_web.web import app as flask_app


@pytest.fixture
def client():
    webmod._engine = Engine(AnalysisConfig(worker_count=2))
    try:
        yield flask_app.test_client()
    finally:
        webmod._engine.shutdown()
        webmod._engine = None


def _upload(payload: bytes, name: str = "t.csv", **form):
    data = {"file": (io.BytesIO(payload), name)}
    data.update(form)
    return data


@pytest.mark.e2e
def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    body = r.get_json()
    assert body["ok"] is True
    assert body["workers"] == 2


@pytest.mark.e2e
def test_analyze_upload_returns_summary(client):
    r = client.post("/api/analyze", data=_upload(b"a\nbb\n\xff\n"), content_type="multipart/form-data")
    assert r.status_code == 200
    data = r.get_json()
    assert data["source"] == "t.csv"
    assert data["total_rows"] == 2
    assert data["error_count"] == 1
    assert data["failed_rows"] == [3]
    assert data["statistics"]["median"] == 1          # (1 + 2) // 2
    assert data["page_counts"] == [{"page_length": 1, "count": 2, "percentage": 100.0}]
    assert "rows" not in data


@pytest.mark.e2e
def test_per_request_overrides_and_rows(client):
    form = {"page_size": "1", "mode": "streaming", "rows": "1"}
    r = client.post("/api/analyze", data=_upload(b"a\nbb\n", **form), content_type="multipart/form-data")
    data = r.get_json()
    assert data["mode"] == "streaming"
    assert data["page_size"] == 1
    assert [row["data_index"] for row in data["rows"]] == [-1, 0]


@pytest.mark.e2e
def test_bad_requests(client):
    assert client.post("/api/analyze", data={}, content_type="multipart/form-data").status_code == 400
    r = client.post("/api/analyze", data=_upload(b"a\n", mode="turbo"), content_type="multipart/form-data")
    assert r.status_code == 400
    assert "turbo" in r.get_json()["error"]


@pytest.mark.e2e
def test_home_page_renders(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "row length analyzer" in r.data.decode("utf-8").lower()


@pytest.mark.e2e
def test_non_integer_page_size_is_rejected(client):
    r = client.post("/api/analyze", data=_upload(b"a\n", page_size="abc"), content_type="multipart/form-data")
    assert r.status_code == 400
    assert "page_size" in r.get_json()["error"]

    r = client.post("/api/analyze", data=_upload(b"a\n", page_size=""), content_type="multipart/form-data")
    assert r.status_code == 200
    assert r.get_json()["page_size"] == 3000
