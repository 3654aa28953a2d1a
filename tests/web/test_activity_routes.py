"""Tests for activity feed and skill validation routes."""


def _assess(client, headers, name="SQL"):
    client.post(
        "/api/user-skills",
        headers=headers,
        json={"skill_name": name, "current_level": 50, "target_level": 80},
    )


def test_activities_newest_first(client, auth_headers):
    _assess(client, auth_headers, "SQL")
    client.post("/api/career-goals", headers=auth_headers, json={"title": "Grow"})
    kinds = [a["activity_type"] for a in client.get("/api/activities", headers=auth_headers).json()]
    assert kinds == ["set_career_goal", "updated_skill"]


def test_activities_limit(client, auth_headers):
    for name in ("A", "B", "C"):
        _assess(client, auth_headers, name)
    assert len(client.get("/api/activities", headers=auth_headers, params={"limit": 2}).json()) == 2
    assert client.get("/api/activities", headers=auth_headers, params={"limit": 0}).status_code == 422


def test_validate_assessed_skill(client, auth_headers):
    _assess(client, auth_headers, "SQL")
    res = client.post(
        "/api/validations",
        headers=auth_headers,
        json={"skill_name": "sql", "validation_type": "certification", "score": 92, "evidence": "cert #1"},
    )
    assert res.status_code == 201
    assert res.json()["skill_name"] == "SQL"

    [listed] = client.get("/api/validations", headers=auth_headers).json()
    assert listed["validation_type"] == "certification"
    assert client.get("/api/activities", headers=auth_headers).json()[0]["activity_type"] == "validated_skill"


def test_validate_unassessed_skill(client, auth_headers):
    res = client.post(
        "/api/validations",
        headers=auth_headers,
        json={"skill_name": "Rust", "validation_type": "project"},
    )
    assert res.status_code == 400


def test_validation_type_checked(client, auth_headers):
    _assess(client, auth_headers, "SQL")
    res = client.post("/api/validations", headers=auth_headers, json={"skill_name": "SQL", "validation_type": "vibes"})
    assert res.status_code == 422
