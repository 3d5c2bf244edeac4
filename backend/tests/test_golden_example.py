import json
from pathlib import Path

from fastapi.testclient import TestClient
from pricing_api.main import app

client = TestClient(app)

CASE = Path(__file__).parent / "cases" / "example_case.json"


def test_golden_example():
    case = json.loads(CASE.read_text())
    r = client.post("/calculate", json=case["input"])
    assert r.status_code == 200
    data = r.json()
    assert data["totals"] == case["expected_totals"]
    assert data["discounts"] == case["expected_discounts"]


def test_golden_example_months():
    case = json.loads(CASE.read_text())
    data = client.post("/calculate", json=case["input"]).json()
    for row in data["schedule"]:
        assert row["usage_after_discount"] == 900.0
        assert row["committed_amount"] == 1000.0
        assert row["true_up"] == 100.0
        assert row["overage"] == 0.0
        assert row["monthly_cost"] == 750.0
    for year in data["yearly"]:
        assert year["total_monthly_cost"] == 9000.0
        assert year["total_true_up"] == 1200.0
        assert year["average_blended_discount"] == -0.25
