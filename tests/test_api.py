"""Tests for the HTTP API."""

from fastapi.testclient import TestClient

from little_ladle.api.app import create_app
from tests.conftest import TODAY, FakeGuidelinesClient, born_days_ago


def _food(fdc_id: int, name: str, category: str, **extra: object) -> dict[str, object]:
    return {"fdcId": fdc_id, "name": name, "category": category, **extra}


CHICKEN = _food(
    1,
    "Chicken",
    "protein",
    nutrients={
        "iron": {"amount": 1.0, "unit": "mg"},
        "zinc": {"amount": 1.5, "unit": "mg"},
    },
    ageGroup="6+ months",
)
CARROT = _food(
    3,
    "Carrot",
    "vegetable",
    nutrients={"vitaminA": {"amount": 835, "unit": "µg"}},
)
BANANA = _food(5, "Banana", "fruit")
YOGURT = _food(7, "Yogurt", "dairy", ageGroup="12+ months")


def _child(days_old: int) -> dict[str, object]:
    return {
        "name": "Sophie",
        "birthDate": born_days_ago(days_old).isoformat(),
        "sex": "female",
    }


def test_health(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/health").json() == {"status": "ok"}


def test_feeding_modes(container) -> None:
    client = TestClient(create_app(container))

    modes = client.get("/feeding-modes").json()["modes"]

    assert modes["complementary"]["target_compliance"] == 60
    assert modes["full"]["target_compliance"] == 80


def test_age_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/age",
        json={"birth_date": born_days_ago(259).isoformat(), "today": TODAY.isoformat()},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["bracket"] == "6-12_months"
    assert body["display_age"] == "8 months, 15 days"


def test_age_appropriate_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/foods/age-appropriate",
        json={
            "birthDate": born_days_ago(259).isoformat(),
            "today": TODAY.isoformat(),
            "foods": [CHICKEN, YOGURT],
        },
    )

    foods = response.json()["foods"]
    flags = {item["fdc_id"]: item["age_appropriate"] for item in foods}
    assert flags == {1: True, 7: False}


def test_requirements_endpoint(container) -> None:
    client = TestClient(create_app(container))

    found = client.get("/requirements/6-12_months")
    missing = client.get("/requirements/over_24_months")

    assert found.status_code == 200
    assert found.json()["daily_requirements"]["iron"]["critical_period"] is True
    assert missing.status_code == 404


def test_requirements_include_weight_based_protein(container) -> None:
    client = TestClient(create_app(container))

    with_weight = client.get("/requirements/6-12_months", params={"weightKg": 8})
    without_weight = client.get("/requirements/12-24_months")
    bad_weight = client.get("/requirements/6-12_months", params={"weightKg": 0})

    assert with_weight.json()["protein"] == {
        "daily_protein": 8.8,
        "unit": "g/day",
        "note": "Based on 8kg body weight",
    }
    assert without_weight.json()["protein"] is None
    assert bad_weight.status_code == 422


def test_refresh_requirements(
    container, guidelines_client: FakeGuidelinesClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/requirements/refresh")

    assert response.json() == {"available": True}
    assert guidelines_client.calls == 1


def test_compliance_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/compliance",
        json={
            "child": _child(310),
            "meal": [{"food": CHICKEN, "servingGrams": 15}],
            "today": TODAY.isoformat(),
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["overall_score"] == 52
    assert body["breakdown"]["key_nutrients"]["deficient"] == ["iron", "vitaminA"]
    assert body["risk_alerts"][0]["severity"] == "high"


def test_unknown_feeding_mode_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/compliance",
        json={"child": _child(310), "meal": [], "feeding_mode": "keto"},
    )

    assert response.status_code == 422


def test_autochef_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/autochef",
        json={
            "child": _child(310),
            "meal": [],
            "availableFoods": [CHICKEN, CARROT, BANANA],
            "feedingMode": "full",
            "today": TODAY.isoformat(),
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["current_meal_score"] == 0
    assert body["target_score"] == 80
    assert body["gaps"]["animal_foods"] is True
    starter = body["suggestions"][0]
    assert starter["name"] == "Balanced Starter Meal"
    assert starter["total_grams"] == 35
    assert [fix["expected_improvement"] for fix in body["quick_fixes"]] == [25, 25]
