def submit(client, **overrides):
    payload = {"latitude": 28.6139, "longitude": 77.2090, "image_url": "before.jpg", **overrides}
    response = client.post("/api/reports", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_map_markers(client):
    first = submit(client)
    second = submit(client, latitude=28.62, longitude=77.21)
    client.post(f"/api/reports/{first['id']}/cleaning", json={"after_image_url": "after.jpg"})

    markers = client.get("/api/map/markers").json()
    assert markers == [
        {"id": second["id"], "lat": 28.62, "lng": 77.21, "status": "PENDING"},
        {"id": first["id"], "lat": 28.6139, "lng": 77.2090, "status": "COMPLETED"},
    ]

    completed = client.get("/api/map/markers", params={"status": "COMPLETED"}).json()
    assert [m["id"] for m in completed] == [first["id"]]


def test_volunteer_dashboard(client):
    a = submit(client)
    b = submit(client)
    submit(client)
    client.post(f"/api/volunteer/reports/{a['id']}/start")
    client.post(f"/api/volunteer/reports/{b['id']}/after-photo", json={"after_image_url": "after.jpg"})

    dashboard = client.get("/api/volunteer/dashboard").json()
    assert dashboard["filter"] == "all"
    assert len(dashboard["reports"]) == 3
    assert dashboard["stats"] == {"total": 3, "pending": 1, "in_progress": 1, "completed": 1}
    assert dashboard["refresh_interval_seconds"] == 5

    in_progress = client.get("/api/volunteer/dashboard", params={"filter": "IN_PROGRESS"}).json()
    assert [r["id"] for r in in_progress["reports"]] == [a["id"]]
    assert in_progress["stats"]["total"] == 3

    assert client.get("/api/volunteer/dashboard", params={"filter": "bogus"}).status_code == 422


def test_volunteer_start_and_finish(client):
    report = submit(client)

    started = client.post(f"/api/volunteer/reports/{report['id']}/start")
    assert started.status_code == 200
    assert started.json()["status"] == "IN_PROGRESS"

    finished = client.post(
        f"/api/volunteer/reports/{report['id']}/after-photo",
        json={"after_image_url": "after.jpg", "volunteer": {"name": "Meera", "email": "meera@village.com"}},
    )
    assert finished.status_code == 200
    assert finished.json()["status"] == "COMPLETED"
    assert finished.json()["cleaning"]["after_image_url"] == "after.jpg"

    assert client.post(f"/api/volunteer/reports/{report['id']}/start").status_code == 409


def test_volunteer_actions_on_missing_report(client):
    assert client.post("/api/volunteer/reports/report_0_missing/start").status_code == 404
    response = client.post(
        "/api/volunteer/reports/report_0_missing/after-photo",
        json={"after_image_url": "after.jpg"},
    )
    assert response.status_code == 404


def test_after_photo_required(client):
    report = submit(client)
    response = client.post(f"/api/volunteer/reports/{report['id']}/after-photo", json={})
    assert response.status_code == 422


def test_analyze_photo(client, png_bytes):
    response = client.post("/api/analyze", files={"image": ("trash.png", png_bytes, "image/png")})

    assert response.status_code == 200
    body = response.json()
    assert body["has_trash"] is True
    assert 75 <= body["confidence"] <= 95


def test_analyze_rejects_non_image(client):
    response = client.post("/api/analyze", files={"image": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400
