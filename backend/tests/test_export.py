import io

from fastapi.testclient import TestClient
from openpyxl import load_workbook
from pricing_api.main import app
from pricing_api.utils_export import pdf_cells
from pricing_engine import CalculatorInputs, compute_projection, schedule_frame, static_usage, yearly_frame

client = TestClient(app)

PAYLOAD = {"agency_tier": "Diamond", "average_monthly_cost": 5000, "year_commitments": [50000, 55000, 60000]}


def test_export_xlsx():
    r = client.post("/export/xlsx", json=PAYLOAD)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert "projection.xlsx" in r.headers["content-disposition"]
    wb = load_workbook(io.BytesIO(r.content))
    assert wb.sheetnames == ["Schedule", "Yearly"]
    assert wb["Schedule"].max_row == 37
    assert wb["Yearly"].max_row == 4
    assert wb["Schedule"]["A1"].value == "Year"


def test_export_pdf():
    r = client.post("/export/pdf", json=PAYLOAD)
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


def test_export_rejects_bad_payload():
    r = client.post("/export/pdf", json={"currency": "JPY"})
    assert r.status_code == 422


def test_pdf_cells_keep_integer_columns():
    r = compute_projection(CalculatorInputs(), static_usage([[1500] * 12] * 3), [18000] * 3)
    rows = pdf_cells(schedule_frame(r))
    assert rows[0][:3] == ["1", "1", "1,500.00"]
    assert rows[-1][:2] == ["3", "12"]
    assert pdf_cells(yearly_frame(r))[2][0] == "3"
