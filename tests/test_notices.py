NOTICE = {"title": "Exam schedule", "description": "Mid-terms start Monday", "category": "Exam"}


def _create(client, headers, **overrides):
    r = client.post("/api/notices", headers=headers, json={**NOTICE, **overrides})
    assert r.status_code == 201, r.json
    return r.json["data"]


def test_create_is_admin_only(client, student_headers):
    r = client.post("/api/notices", headers=student_headers, json=NOTICE)
    assert r.status_code == 403
    r = client.post("/api/notices", json=NOTICE)
    assert r.status_code == 401


def test_create_and_read(client, admin_headers):
    notice = _create(client, admin_headers, expiryDate="2026-12-31")
    assert notice["isActive"] is True
    assert notice["expiryDate"] == "2026-12-31"
    assert notice["postedBy"]["name"] == "Ada Admin"

    r = client.get(f"/api/notices/{notice['id']}")
    assert r.status_code == 200
    assert r.json["data"]["title"] == "Exam schedule"

    r = client.get("/api/notices/999")
    assert r.status_code == 404
    assert r.json["message"] == "Notice not found"


def test_validation(client, admin_headers):
    r = client.post("/api/notices", headers=admin_headers, json={"description": "no title"})
    assert r.json["message"] == "Title is required"
    r = client.post("/api/notices", headers=admin_headers, json={**NOTICE, "title": "t" * 201})
    assert r.json["message"] == "Title cannot be more than 200 characters"
    r = client.post("/api/notices", headers=admin_headers, json={**NOTICE, "category": "Gossip"})
    assert r.status_code == 400
    assert r.json["message"] == "Invalid category"


def test_list_shows_active_newest_first(client, admin_headers):
    _create(client, admin_headers, title="Old news", category="General")
    hidden = _create(client, admin_headers, title="Hidden", isActive=False)
    _create(client, admin_headers, title="Library hours", description="Open till midnight", category="Academic")

    r = client.get("/api/notices")
    titles = [n["title"] for n in r.json["data"]["notices"]]
    assert titles == ["Library hours", "Old news"]
    assert hidden["id"] not in [n["id"] for n in r.json["data"]["notices"]]

    r = client.get("/api/notices?category=Academic")
    assert [n["title"] for n in r.json["data"]["notices"]] == ["Library hours"]

    r = client.get("/api/notices?search=MIDNIGHT")
    assert [n["title"] for n in r.json["data"]["notices"]] == ["Library hours"]


def test_update_and_delete(client, admin_headers):
    notice = _create(client, admin_headers)
    r = client.put(
        f"/api/notices/{notice['id']}",
        headers=admin_headers,
        json={**NOTICE, "title": "Exam schedule (revised)", "isActive": False},
    )
    assert r.status_code == 200
    assert r.json["data"]["title"] == "Exam schedule (revised)"
    assert r.json["data"]["isActive"] is False

    r = client.delete(f"/api/notices/{notice['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert client.get(f"/api/notices/{notice['id']}").status_code == 404
