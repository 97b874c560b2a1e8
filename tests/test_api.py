import pytest
from fastapi.testclient import TestClient

from src.tripzone.main import create_app


def _candidate_payload(cid: str, lat: float, lon: float, category: str, rating: float = 4.2) -> dict:
    return {
        "candidate_id": cid,
        "name": f"Place {cid}",
        "category": category,
        "latitude": lat,
        "longitude": lon,
        "rating": rating,
        "review_count": 250,
        "address": "Jongno-gu Sejong-daero",
    }


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def candidates() -> list[dict]:
    categories = ["restaurant", "attraction", "restaurant", "cafe", "activity", "restaurant", "night-view"]
    return [
        _candidate_payload(f"P{i}", 37.57 + 0.002 * i, 126.98 + 0.001 * i, category)
        for i, category in enumerate(categories)
    ]


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_plan_endpoint(api_client: TestClient, candidates):
    response = api_client.post(
        "/api/itineraries/plan",
        json={"candidates": candidates, "trip_days": 1, "start_date": "2025-05-01", "transport_mode": "walking"},
    )

    assert response.status_code == 200
    body = response.json()
    assert len(body["days"]) == 1
    day = body["days"][0]
    assert day["date"] == "2025-05-01"
    assert set(day["regions"]) == {"Jongno-gu"}
    assert body["summary"]["total_places"] == len(day["places"])
    assert body["summary"]["total_places"] > 0
    assert body["metadata"]["cluster_count"] == 2
    assert all(place["time_block"] for place in day["places"])


def test_plan_endpoint_clamps_days(api_client: TestClient, candidates):
    response = api_client.post("/api/itineraries/plan", json={"candidates": candidates, "trip_days": 7})

    assert response.status_code == 200
    assert len(response.json()["days"]) == 3


def test_plan_endpoint_rejects_invalid_payload(api_client: TestClient, candidates):
    response = api_client.post("/api/itineraries/plan", json={"candidates": candidates, "target_regions": 0})
    assert response.status_code == 422


def test_plan_with_suggestions_marks_review(api_client: TestClient, candidates):
    response = api_client.post(
        "/api/itineraries/plan",
        json={
            "candidates": candidates,
            "trip_days": 1,
            "suggestions": [{"day": 1, "type": "ADD_BREAK", "durationMinutes": 20}],
        },
    )

    body = response.json()
    assert body["summary"]["review_applied"] is True
    assert body["days"][0]["breaks"][0]["duration_minutes"] == 20


def test_adjust_endpoint(api_client: TestClient, candidates):
    planned = api_client.post(
        "/api/itineraries/plan",
        json={"candidates": candidates, "trip_days": 1, "start_date": "2025-05-01"},
    ).json()
    first = planned["days"][0]["places"][0]["candidate_id"]

    response = api_client.post(
        "/api/itineraries/adjust",
        json={
            "days": planned["days"],
            "suggestions": [
                {"day": 1, "type": "REMOVE", "place": "Not A Place"},
                {"day": 1, "type": "REMOVE", "place": first},
            ],
        },
    )

    assert response.status_code == 200
    body = response.json()
    remaining = [place["candidate_id"] for place in body["days"][0]["places"]]
    assert first not in remaining
    assert len(remaining) == len(planned["days"][0]["places"]) - 1
    assert body["summary"]["review_applied"] is True


def test_adjust_rejects_duplicate_days(api_client: TestClient):
    day = {"day_number": 1, "date": "2025-05-01"}
    response = api_client.post("/api/itineraries/adjust", json={"days": [day, day]})
    assert response.status_code == 400


def test_plan_csv(api_client: TestClient, candidates):
    response = api_client.post("/api/itineraries/plan/csv", json={"candidates": candidates, "trip_days": 1})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("day,date,sequence,time_block")
    assert len(lines) > 1
