"""Tests for the HTTP API."""

from datetime import UTC, datetime

from fastapi.testclient import TestClient

from food_tracker.api.app import create_app
from food_tracker.services.entry_meta import decode_entry_meta
from tests.conftest import (
    FakeEstimateClient,
    InMemoryEntryRepository,
    InMemoryProfileStore,
    make_entry,
    meta_notes,
)


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_create_and_list_entries(
    container, entry_repository: InMemoryEntryRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/entries",
        json={
            "mealText": "apple",
            "timestamp": "2024-06-15T10:00:00Z",
            "wholeFoodsPercent": 100,
            "mood": "Happy",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["mealText"] == "apple"
    assert body["sizeWeight"] is None
    assert len(entry_repository.entries) == 1
    assert client.get("/entries").json()[0]["id"] == body["id"]


def test_create_entry_without_text_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/entries", json={"mealText": "  ", "timestamp": "2024-06-15T10:00:00Z"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Meal text is required."}


def test_update_and_delete_entry(
    container, entry_repository: InMemoryEntryRepository
) -> None:
    entry = entry_repository.add(make_entry(40))
    client = TestClient(create_app(container))

    updated = client.patch(f"/entries/{entry.id}", json={"wholeFoodsPercent": 65})
    assert updated.status_code == 200
    assert updated.json()["wholeFoodsPercent"] == 65

    assert client.delete(f"/entries/{entry.id}").json() == {"ok": True}
    assert client.delete(f"/entries/{entry.id}").status_code == 404
    assert client.patch("/entries/missing", json={"mood": "Tired"}).status_code == 404


def test_estimate_returns_normalized_estimate(
    container, estimate_client: FakeEstimateClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/estimate", json={"mealText": "chicken and rice"})

    assert response.status_code == 200
    body = response.json()
    assert body["optimal_score"] == 86
    assert body["size_label"] == "large"
    assert body["nutrients"]["protein_g"] == 42
    assert estimate_client.calls[0][1]["targets"]["optimal_goal"] == 80


def test_estimate_failure_returns_bad_gateway(
    container, estimate_client: FakeEstimateClient
) -> None:
    estimate_client.error = RuntimeError("upstream timeout")
    client = TestClient(create_app(container))

    response = client.post("/estimate", json={"mealText": "chicken and rice"})

    assert response.status_code == 502
    assert response.json() == {"error": "upstream timeout"}


def test_estimate_requires_text(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/estimate", json={"mealText": ""})

    assert response.status_code == 400


def test_commit_estimate_saves_entry(
    container, entry_repository: InMemoryEntryRepository
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/entries/commit",
        json={
            "mealText": "salmon and greens",
            "estimate": {"optimal_score": 92, "nutrients": {"omega3_g": 2.1}},
            "feelAfter": 5,
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["wholeFoodsPercent"] == 92
    assert body["sizeLabel"] == "medium"
    meta = decode_entry_meta(entry_repository.entries[body["id"]].notes)
    assert meta is not None
    assert meta.feel_after == 5


def test_settings_roundtrip(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/settings").json() == {"goalPercent": 80}
    assert client.patch("/settings", json={"goalPercent": 250}).json() == {
        "goalPercent": 100
    }
    assert client.get("/settings").json() == {"goalPercent": 100}


def test_profile_and_targets(container, profile_store: InMemoryProfileStore) -> None:
    client = TestClient(create_app(container))

    profile = client.put("/profile", json={"age": 35, "sex": "female"}).json()
    assert profile["age"] == 35
    assert profile["sex"] == "female"
    assert client.get("/profile").json() == profile

    targets = client.put("/targets", json={"fiber_g": 50}).json()
    assert targets["fiber_g"] == 50
    assert profile_store.targets == {"fiber_g": 50}

    reset = client.delete("/targets").json()
    assert reset["fiber_g"] == 28
    assert client.get("/targets").json() == reset


def test_summaries(container, entry_repository: InMemoryEntryRepository) -> None:
    now = datetime.now(tz=UTC)
    entry_repository.add(make_entry(90, timestamp=now, notes=meta_notes(4, fiber_g=10)))
    client = TestClient(create_app(container))

    overview = client.get("/summary/overview").json()
    today = client.get("/summary/today").json()
    week = client.get("/summary/week").json()

    assert overview["today_count"] == 1
    assert overview["streak"] == 1
    assert today["average_score"] == 90
    assert today["totals"]["fiber_g"] == 10
    assert today["coverage"]["fiber_g"]["color"] == "bad"
    assert len(week["days"]) == 7
    assert week["end_key"] == today["day_key"]


def test_grocery(container) -> None:
    client = TestClient(create_app(container))

    body = client.get("/grocery").json()

    assert body["weekly_macros"]["protein_g"] == 917
    assert len(body["items"]) == 8
