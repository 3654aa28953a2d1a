"""Tests for career goal routes."""


def test_create_and_list(client, auth_headers):
    res = client.post(
        "/api/career-goals",
        headers=auth_headers,
        json={"title": "Lead a team", "description": "within two years", "timeline_months": 24},
    )
    assert res.status_code == 201
    goal = res.json()
    assert goal["timeline_months"] == 24

    listed = client.get("/api/career-goals", headers=auth_headers).json()
    assert [g["id"] for g in listed] == [goal["id"]]
    assert client.get(f"/api/career-goals/{goal['id']}", headers=auth_headers).json()["title"] == "Lead a team"


def test_create_validation(client, auth_headers):
    assert client.post("/api/career-goals", headers=auth_headers, json={"title": ""}).status_code == 422
    res = client.post("/api/career-goals", headers=auth_headers, json={"title": "x", "timeline_months": 0})
    assert res.status_code == 422


def test_create_with_unknown_role(client, auth_headers):
    res = client.post("/api/career-goals", headers=auth_headers, json={"title": "x", "target_role_id": 9999})
    assert res.status_code == 404


def test_create_with_target_role_selects_it(client, auth_headers, role_id):
    client.post("/api/career-goals", headers=auth_headers, json={"title": "Agile", "target_role_id": role_id})
    role = client.get("/api/target-role", headers=auth_headers).json()["role"]
    assert role["id"] == role_id


def test_get_missing(client, auth_headers):
    assert client.get("/api/career-goals/999", headers=auth_headers).status_code == 404


def test_patch(client, auth_headers, role_id):
    goal = client.post("/api/career-goals", headers=auth_headers, json={"title": "Grow"}).json()
    res = client.patch(
        f"/api/career-goals/{goal['id']}",
        headers=auth_headers,
        json={"timeline_months": 6, "target_role_id": role_id},
    )
    assert res.status_code == 200
    assert res.json()["timeline_months"] == 6
    assert client.get("/api/target-role", headers=auth_headers).json()["role"]["id"] == role_id

    res = client.patch(f"/api/career-goals/{goal['id']}", headers=auth_headers, json={"target_role_id": None})
    assert res.json()["target_role_id"] is None
    assert client.get("/api/target-role", headers=auth_headers).json()["role"] is None


def test_patch_older_goal_keeps_session_role(client, auth_headers, role_id):
    old = client.post("/api/career-goals", headers=auth_headers, json={"title": "Old"}).json()
    client.post("/api/career-goals", headers=auth_headers, json={"title": "New", "target_role_id": role_id})
    client.patch(f"/api/career-goals/{old['id']}", headers=auth_headers, json={"target_role_id": None})
    assert client.get("/api/target-role", headers=auth_headers).json()["role"]["id"] == role_id


def test_patch_null_title_rejected(client, auth_headers):
    goal = client.post("/api/career-goals", headers=auth_headers, json={"title": "Grow"}).json()
    res = client.patch(f"/api/career-goals/{goal['id']}", headers=auth_headers, json={"title": None})
    assert res.status_code == 400
    assert client.get(f"/api/career-goals/{goal['id']}", headers=auth_headers).json()["title"] == "Grow"


def test_patch_null_timeline_rejected(client, auth_headers):
    goal = client.post("/api/career-goals", headers=auth_headers, json={"title": "Grow"}).json()
    res = client.patch(f"/api/career-goals/{goal['id']}", headers=auth_headers, json={"timeline_months": None})
    assert res.status_code == 400


def test_patch_unknown_role(client, auth_headers):
    goal = client.post("/api/career-goals", headers=auth_headers, json={"title": "Grow"}).json()
    res = client.patch(f"/api/career-goals/{goal['id']}", headers=auth_headers, json={"target_role_id": 9999})
    assert res.status_code == 404


def test_patch_missing_goal(client, auth_headers):
    assert client.patch("/api/career-goals/999", headers=auth_headers, json={"title": "x"}).status_code == 404


def test_goals_are_per_user(client, auth_headers, auth_headers_b):
    goal = client.post("/api/career-goals", headers=auth_headers, json={"title": "Mine"}).json()
    assert client.get(f"/api/career-goals/{goal['id']}", headers=auth_headers_b).status_code == 404
    assert client.get("/api/career-goals", headers=auth_headers_b).json() == []
