"""Endpoint tests for /activities and the recalculation they trigger."""

import json

import pytest

from conftest import USER_ID

from runtracker.storage.base import StorageError


JAN_GOAL = {
    "title": "January 20k",
    "type": "distance",
    "target": 20,
    "unit": "km",
    "start_date": "2024-01-01",
    "deadline": "2024-01-31",
}


def activity_payload(day="2024-01-05", distance=12.0, duration=66, pace=5.5, **extra):
    payload = {"date": day, "distance": distance, "duration": duration, "pace": pace}
    payload.update(extra)
    return payload


def create_goal(client, **overrides):
    body = dict(JAN_GOAL, **overrides)
    r = client.post("/goals", json=body)
    assert r.status_code == 201, r.text
    return r.json()


class TestCreateActivity:
    @pytest.mark.parametrize("missing", ["date", "distance", "duration", "pace"])
    def test_required_fields(self, client, storage, missing):
        payload = activity_payload()
        payload.pop(missing)
        r = client.post("/activities", json=payload)
        assert r.status_code == 422
        assert storage.activities == {}

    def test_negative_distance_rejected(self, client):
        r = client.post("/activities", json=activity_payload(distance=-1))
        assert r.status_code == 422

    def test_optional_fields_round_trip(self, client):
        r = client.post(
            "/activities",
            json=activity_payload(location="Park", notes="windy", images=["data:image/png;base64,AAA"]),
        )
        assert r.status_code == 201
        body = r.json()
        assert body["location"] == "Park"
        assert body["notes"] == "windy"
        assert body["images"] == ["data:image/png;base64,AAA"]
        assert body["user_id"] == USER_ID

    def test_create_recalculates_goals(self, client):
        goal = create_goal(client)
        client.post("/activities", json=activity_payload("2024-01-05", 12))
        client.post("/activities", json=activity_payload("2024-01-20", 9))
        client.post("/activities", json=activity_payload("2024-02-01", 100))

        r = client.get(f"/goals/{goal['id']}")
        assert r.json()["current_value"] == 21
        assert r.json()["status"] == "completed"

    def test_recalculation_failure_does_not_fail_request(self, client, storage, monkeypatch):
        goal = create_goal(client)

        def boom(*args, **kwargs):
            raise StorageError("progress write failed")

        monkeypatch.setattr(storage, "update_goal_progress", boom)

        r = client.post("/activities", json=activity_payload())
        assert r.status_code == 201
        assert len(storage.activities) == 1
        # goal is stale until the next successful pass
        assert client.get(f"/goals/{goal['id']}").json()["current_value"] == 0

        monkeypatch.undo()
        client.post("/goals/recalculate")
        assert client.get(f"/goals/{goal['id']}").json()["current_value"] == 12


class TestListAndGetActivity:
    def test_list_orders_by_date_desc(self, client):
        for day in ["2024-01-03", "2024-01-09", "2024-01-06"]:
            client.post("/activities", json=activity_payload(day))
        dates = [a["date"] for a in client.get("/activities").json()]
        assert dates == ["2024-01-09", "2024-01-06", "2024-01-03"]

    def test_pagination(self, client):
        for day in range(1, 6):
            client.post("/activities", json=activity_payload(f"2024-01-0{day}"))
        r = client.get("/activities", params={"limit": 2, "offset": 1})
        assert [a["date"] for a in r.json()] == ["2024-01-04", "2024-01-03"]

    def test_limit_bounds(self, client):
        assert client.get("/activities", params={"limit": 0}).status_code == 422

    def test_get_unknown_is_404(self, client):
        assert client.get("/activities/nope").status_code == 404

    def test_malformed_stored_images_read_as_empty(self, client, storage):
        created = client.post("/activities", json=activity_payload()).json()
        storage.activities[created["id"]]["images"] = "{not json"

        r = client.get(f"/activities/{created['id']}")
        assert r.status_code == 200
        assert r.json()["images"] == []

    def test_stored_images_are_decoded(self, client, storage):
        created = client.post("/activities", json=activity_payload()).json()
        storage.activities[created["id"]]["images"] = json.dumps(["a.jpg", "b.jpg"])

        assert client.get(f"/activities/{created['id']}").json()["images"] == ["a.jpg", "b.jpg"]


class TestUpdateActivity:
    def test_partial_update_keeps_other_fields(self, client):
        created = client.post(
            "/activities",
            json=activity_payload(location="Track", notes="8x400", images=["x.png"]),
        ).json()

        r = client.put(f"/activities/{created['id']}", json={"notes": "8x400 @ 5k pace"})
        assert r.status_code == 200
        body = r.json()
        assert body["notes"] == "8x400 @ 5k pace"
        assert body["location"] == "Track"
        assert body["distance"] == created["distance"]
        assert body["images"] == ["x.png"]

    def test_extra_client_fields_are_ignored(self, client):
        created = client.post("/activities", json=activity_payload()).json()
        r = client.put(
            f"/activities/{created['id']}",
            json={"id": "other", "created_at": "2020-01-01T00:00:00", "distance": 13},
        )
        assert r.status_code == 200
        assert r.json()["id"] == created["id"]
        assert r.json()["distance"] == 13

    def test_update_moves_activity_out_of_window(self, client):
        goal = create_goal(client)
        created = client.post("/activities", json=activity_payload("2024-01-05", 25)).json()
        assert client.get(f"/goals/{goal['id']}").json()["status"] == "completed"

        client.put(f"/activities/{created['id']}", json={"date": "2024-02-05"})

        body = client.get(f"/goals/{goal['id']}").json()
        assert body["current_value"] == 0
        assert body["status"] == "active"

    def test_update_unknown_is_404(self, client):
        r = client.put("/activities/nope", json={"notes": "x"})
        assert r.status_code == 404

    def test_update_validation(self, client):
        created = client.post("/activities", json=activity_payload()).json()
        r = client.put(f"/activities/{created['id']}", json={"duration": -5})
        assert r.status_code == 422


class TestDeleteActivity:
    def test_scenario_b(self, client):
        goal = create_goal(client)
        client.post("/activities", json=activity_payload("2024-01-05", 12))
        nine = client.post("/activities", json=activity_payload("2024-01-20", 9)).json()
        assert client.get(f"/goals/{goal['id']}").json()["status"] == "completed"

        r = client.delete(f"/activities/{nine['id']}")
        assert r.status_code == 200
        assert r.json()["id"] == nine["id"]

        body = client.get(f"/goals/{goal['id']}").json()
        assert body["current_value"] == 12
        assert body["status"] == "active"

    def test_delete_unknown_is_404(self, client):
        assert client.delete("/activities/nope").status_code == 404
