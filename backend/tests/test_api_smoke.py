def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_and_list_activity(client):
    payload = {
        "date": "2025-01-01",
        "distance": 8.0,
        "duration": 44,
        "pace": 5.5,
        "location": "Riverside loop",
        "notes": "",
    }
    cr = client.post("/activities", json=payload)
    assert cr.status_code == 201, cr.text
    activity = cr.json()
    assert activity["images"] == []
    assert activity["id"]

    lr = client.get("/activities")
    assert lr.status_code == 200
    arr = lr.json()
    assert any(a["location"] == "Riverside loop" for a in arr)
