def test_health_endpoints(client):
    assert client.get("/api/health").json() == {"status": "ok"}

    live = client.get("/api/health/live")
    assert live.status_code == 200
    assert live.json()["status"] == "ok"

    ready = client.get("/api/health/ready")
    assert ready.status_code == 200
    payload = ready.json()
    assert payload["store"]["ok"] is True
    assert payload["store"]["backend"] in {"memory", "sql"}
    assert payload["store"]["counts"]["timetable_entries"] == 0


def test_ready_reports_store_counts(client, store):
    store.rooms.create({"name": "A301", "type": "classroom", "capacity": 40})

    payload = client.get("/api/health/ready").json()

    assert payload["store"]["counts"]["rooms"] == 1
