from fastapi.testclient import TestClient

from rental_engine.api import app

client = TestClient(app)

FORM = {
    "property_address": "Av. Apoquindo 4500",
    "property_value_clp": "100000000",
    "property_size_m2": "50",
    "suggested_rent_clp": "800000",
    "annual_maintenance_clp": "500000",
    "annual_property_tax_clp": "300000",
    "annual_insurance_clp": "200000",
    "plan_a_commission": "15",
}


def test_health():
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_analysis_endpoint():
    resp = client.post("/api/analysis", json=FORM)
    assert resp.status_code == 200
    payload = resp.json()
    assert [plan["id"] for plan in payload["plans"]] == ["A", "B", "C"]
    assert payload["plans"][0]["commission_percentage"] == 15
    assert abs(payload["cap_rate_analysis"]["cap_rate_percentage"] - 8.6) < 1e-9


def test_analysis_quick_flow():
    resp = client.post("/api/analysis", params={"flow": "quick"}, json=FORM)
    assert resp.status_code == 200
    assert resp.json()["flow"] == "quick"


def test_unknown_flow_is_rejected():
    resp = client.post("/api/analysis", params={"flow": "express"}, json=FORM)
    assert resp.status_code == 422


def test_garbage_fields_still_produce_result():
    resp = client.post("/api/analysis", json={"suggested_rent_clp": "abc", "property_value_clp": ""})
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["cap_rate_analysis"]["cap_rate_percentage"] == 0
    assert payload["vacancy_impact"]["break_even_reduction_percentage"] == 0


def test_calculations_endpoint():
    resp = client.post("/api/calculations", json=FORM)
    assert resp.status_code == 200
    payload = resp.json()
    assert len(payload["plan_comparisons"]) == 3
    assert payload["vacancy_cost_per_month"] == 800000


def test_suggest_rent_endpoint():
    resp = client.post("/api/suggest-rent", json={"property_size_m2": "50"})
    assert resp.status_code == 200
    assert resp.json()["suggested_rent_clp"] == 22400


def test_plan_templates_endpoint():
    resp = client.get("/api/plan-templates")
    assert resp.status_code == 200
    payload = resp.json()
    assert set(payload) == {"brokerage", "quick"}
    assert [step["day"] for step in payload["brokerage"][0]["schedule"]] == [0, 7, 15, 22]


def test_suggest_rent_with_overflowing_size():
    resp = client.post("/api/suggest-rent", json={"property_size_m2": "1e306"})
    assert resp.status_code == 200
    assert resp.json()["suggested_rent_clp"] == 0
