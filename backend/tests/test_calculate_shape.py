from fastapi.testclient import TestClient
from pricing_api.main import app

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_calculate_shape():
    payload = {"agency_tier": "Platinum", "average_monthly_cost": 2500, "year_commitments": [24000, 26000, 28000]}
    r = client.post("/calculate", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert {"discounts", "totals", "yearly", "schedule"}.issubset(data.keys())
    assert {"total_cost", "total_savings", "average_monthly_cost", "total_discount"} == set(data["totals"].keys())
    assert len(data["schedule"]) == 36
    assert [y["year"] for y in data["yearly"]] == [1, 2, 3]
    assert [y["yearly_commitment"] for y in data["yearly"]] == [24000, 26000, 28000]
    assert (data["schedule"][0]["year"], data["schedule"][0]["month"]) == (1, 1)
    assert (data["schedule"][-1]["year"], data["schedule"][-1]["month"]) == (3, 12)


def test_calculate_uses_template_anchor():
    r = client.post("/calculate", json={"template": "large-agency"})
    assert r.status_code == 200
    assert r.json()["schedule"][0]["base_usage"] == 18000.0


def test_explicit_average_wins_over_template():
    r = client.post("/calculate", json={"template": "large-agency", "average_monthly_cost": 500})
    assert r.json()["schedule"][0]["base_usage"] == 500.0


def test_calculate_is_deterministic_for_seeded_pattern():
    payload = {"variation_pattern": "highly-variable", "enable_variations": True, "seed": 7}
    a = client.post("/calculate", json=payload).json()
    b = client.post("/calculate", json=payload).json()
    assert a == b


def test_invalid_tier_rejected():
    r = client.post("/calculate", json={"agency_tier": "Silver"})
    assert r.status_code == 422


def test_negative_licenses_rejected():
    r = client.post("/calculate", json={"free_user_licenses": -1})
    assert r.status_code == 422


def test_bad_usage_grid_rejected():
    r = client.post("/calculate", json={"monthly_usage": [[1000] * 12, [1000] * 12]})
    assert r.status_code == 422


def test_unknown_template_rejected():
    r = client.post("/calculate", json={"template": "mega-corp"})
    assert r.status_code == 422


def test_discounts_endpoint():
    r = client.post("/discounts", json={
        "agency_tier": "Diamond", "contract_type": "Reseller",
        "commitment_type": "Monthly Spending", "commitment_duration": "24 months",
    })
    assert r.status_code == 200
    assert r.json() == {
        "reseller_discount": 0.1,
        "commitment_discount": 0.15,
        "commitment_bonus": 0.07,
        "referral_year1": 0.1,
        "referral_following": 0.05,
    }


def test_presets():
    data = client.get("/presets").json()
    assert {c["code"] for c in data["currencies"]} == {"USD", "EUR", "GBP", "CAD", "AUD"}
    assert len(data["templates"]) == 6
    assert "steady-growth" in {p["id"] for p in data["variation_patterns"]}


def test_suggest_commitments():
    payload = {
        "agency_tier": "Gold", "contract_type": "Reseller", "support_level": "No Support",
        "monthly_usage": [[1000] * 12] * 3, "year_commitments": [60000, 60000, 60000],
    }
    r = client.post("/commitments/suggest", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["current_commitments"] == [60000, 60000, 60000]
    assert data["suggested_commitments"] == [10800, 10800, 10800]
    months = data["projection"]["schedule"]
    assert all(m["true_up"] == 0.0 and m["overage"] == 0.0 for m in months)


def test_suggestion_and_revised_projection_share_usage():
    payload = {
        "agency_tier": "Registered", "contract_type": "Direct", "support_level": "No Support",
        "variation_pattern": "highly-variable", "enable_variations": True, "seed": None,
    }
    data = client.post("/commitments/suggest", json=payload).json()
    yearly = data["projection"]["yearly"]
    assert data["suggested_commitments"] == [round(y["total_usage_after_discount"]) for y in yearly]
    assert [y["yearly_commitment"] for y in yearly] == data["suggested_commitments"]
