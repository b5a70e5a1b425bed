import io
from unittest.mock import patch

import pytest
from docx import Document

from app.api.routes.reports import DOCX_MEDIA_TYPE

# ------------------------------------------------------------------- Generate report --------------------------------------------------------------------------- #


def test_generate_report_success(client, reports_dir):
    payload = {
        "clientName": "Acme Corporation",
        "reportType": "P&L",
        "reportYear": 2024,
        "timestamp": "2024-03-05T14:07:09Z",
        "requestId": "REQ-12345",
    }

    response = client.post("/api/generate-report", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Report generated successfully"
    assert data["fileName"].endswith(".docx")
    assert data["filePath"] == str(reports_dir / data["fileName"])

    paragraphs = [p.text for p in Document(data["filePath"]).paragraphs if p.text]
    assert paragraphs[0] == "Financial Report: P&L"
    assert paragraphs[1] == "Client: Acme Corporation"
    assert paragraphs[2] == "Reporting Year: 2024"
    assert paragraphs[3].startswith("Generated on: ")


def test_generate_report_defaults_year(client):
    from datetime import datetime

    response = client.post("/api/generate-report", json={"clientName": "Acme", "reportType": "Balance Sheet"})

    assert response.status_code == 200
    texts = [p.text for p in Document(response.json()["filePath"]).paragraphs]
    assert f"Reporting Year: {datetime.now().year}" in texts


def test_generate_report_accepts_pascal_case_names(client):
    response = client.post("/api/generate-report", json={"ClientName": "Acme", "ReportType": "Cash Flow", "ReportYear": 2023})

    assert response.status_code == 200
    assert "_Cash_Flow_" in response.json()["fileName"]


def test_generate_report_sanitizes_file_name(client):
    response = client.post("/api/generate-report", json={"clientName": "A/B:C", "reportType": "P&L"})

    assert response.status_code == 200
    file_name = response.json()["fileName"]
    for char in ("/", "\\", ":"):
        assert char not in file_name


def test_generate_report_long_multibyte_client_name(client):
    response = client.post("/api/generate-report", json={"clientName": "株式会社" * 20, "reportType": "P&L"})

    assert response.status_code == 200
    assert len(response.json()["fileName"].encode("utf-8")) <= 255


@pytest.mark.parametrize(
    "body, message",
    [
        (b"", "Request body is empty"),
        (b"   ", "Invalid JSON format"),
        (b"{not json", "Invalid JSON format"),
        (b"null", "Invalid JSON format"),
        (b'{"clientName": "Acme", "reportType": "P&L", "reportYear": "soon"}', "Invalid JSON format"),
        (b'{"reportType": "P&L"}', "Client name is required"),
        (b'{"clientName": "", "reportType": "P&L"}', "Client name is required"),
        (b'{"clientName": "   ", "reportType": "P&L"}', "Client name is required"),
        (b'{"clientName": "Acme"}', "Report type is required"),
        (b'{"clientName": "Acme", "reportType": " "}', "Report type is required"),
        (b'{"clientName": "Acme\\u0007", "reportType": "P&L"}', "unsupported control characters"),
    ],
)
def test_generate_report_client_errors(client, reports_dir, body, message):
    response = client.post("/api/generate-report", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert message in response.text
    assert not reports_dir.exists() or list(reports_dir.iterdir()) == []


@patch("app.report.service.render_document", side_effect=OSError("disk full"))
def test_generate_report_storage_failure(mock_render, client, reports_dir):
    response = client.post("/api/generate-report", json={"clientName": "Acme", "reportType": "P&L"})

    assert response.status_code == 500
    assert response.text.startswith("Error generating report: ")
    assert "disk full" in response.text
    assert list(reports_dir.iterdir()) == []
    mock_render.assert_called_once()


@patch("app.report.service.render_document", side_effect=RuntimeError("boom"))
def test_generate_report_unexpected_failure_hides_detail(mock_render, client):
    response = client.post("/api/generate-report", json={"clientName": "Acme", "reportType": "P&L"})

    assert response.status_code == 500
    assert response.text == "Error generating report"


# ------------------------------------------------------------------- Download --------------------------------------------------------------------------- #


def test_download_returns_generated_bytes(client):
    generated = client.post("/api/generate-report", json={"clientName": "Acme", "reportType": "P&L", "reportYear": 2024}).json()

    response = client.get(f"/api/download/{generated['fileName']}")

    assert response.status_code == 200
    assert response.headers["content-type"] == DOCX_MEDIA_TYPE
    assert "attachment" in response.headers["content-disposition"]
    with open(generated["filePath"], "rb") as handle:
        assert response.content == handle.read()
    assert Document(io.BytesIO(response.content)).paragraphs[1].text == "Client: Acme"


def test_download_unknown_file_is_not_found(client):
    response = client.get("/api/download/never_generated.docx")

    assert response.status_code == 404
    assert response.text == "File not found"


def test_download_blank_name_is_bad_request(client):
    response = client.get("/api/download/%20")

    assert response.status_code == 400
    assert response.text == "File name is required"


def test_download_cannot_escape_storage_root(client, reports_dir):
    reports_dir.mkdir(parents=True, exist_ok=True)
    (reports_dir.parent / "outside.docx").write_bytes(b"secret")

    response = client.get("/api/download/..%2Foutside.docx")

    assert response.status_code == 404


# ------------------------------------------------------------------- Service endpoints --------------------------------------------------------------------------- #


def test_root_liveness(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "Financial Report Generator API is running!"


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_responses_carry_request_id(client):
    response = client.get("/")

    assert len(response.headers["X-Request-ID"]) == 36


def test_cors_allows_configured_origin(client):
    response = client.options(
        "/api/generate-report",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_cors_rejects_unknown_origin(client):
    response = client.options(
        "/api/generate-report",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )

    assert "access-control-allow-origin" not in response.headers
