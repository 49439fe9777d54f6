from constellation.tests.factories import action_payload, auth, register

JOIN_FORM = {
    "motivation": "I live nearby",
    "selectedTags": ["Sampler"],
    "resourceDescription": "Saturday mornings",
    "phone": "0912345678",
}


def _create(client, token, **overrides):
    r = client.post("/api/v1/actions", json=action_payload(**overrides), headers=auth(token))
    assert r.status_code == 201, r.text
    return r.json()["action"]


def test_create_requires_auth(client):
    assert client.post("/api/v1/actions", json=action_payload()).status_code == 401


def test_create_and_fetch(client):
    token, user = register(client, "Owner")
    action = _create(client, token)

    assert action["ownerId"] == user["id"]
    assert action["interactions"] == {"support": 0, "meaningful": 0, "interested": 0}

    r = client.get(f"/api/v1/actions/{action['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["action"]["name"] == "River watch"
    assert body["participations"] == []


def test_create_validation(client):
    token, _ = register(client, "Owner")
    r = client.post("/api/v1/actions", json=action_payload(maxParticipants=0), headers=auth(token))
    assert r.status_code == 400
    r = client.post("/api/v1/actions", json=action_payload(shapePoints=[]), headers=auth(token))
    assert r.status_code == 400


def test_get_missing_action(client):
    r = client.get("/api/v1/actions/nope")
    assert r.status_code == 404
    assert r.json()["detail"] == "Action not found."


def test_list_paging_and_filters(client):
    token, _ = register(client, "Owner")
    for n in range(3):
        _create(client, token, name=f"Env {n}")
    _create(client, token, name="Library day", category="Education")

    r = client.get("/api/v1/actions", params={"pageSize": 2})
    body = r.json()
    assert body["total"] == 4 and body["pageSize"] == 2 and body["page"] == 1
    assert len(body["data"]) == 2
    assert body["data"][0]["name"] == "Library day"

    r = client.get("/api/v1/actions", params={"category": "education"})
    assert [a["name"] for a in r.json()["data"]] == ["Library day"]

    r = client.get("/api/v1/actions", params={"pageSize": 0})
    assert r.json()["pageSize"] == 1
    assert len(r.json()["data"]) == 1


def test_update_permissions(client):
    owner_token, _ = register(client, "Owner")
    other_token, _ = register(client, "Other")
    action = _create(client, owner_token)

    r = client.put(f"/api/v1/actions/{action['id']}", json={"name": "Hijacked"}, headers=auth(other_token))
    assert r.status_code == 403

    r = client.put(f"/api/v1/actions/{action['id']}", json={"summary": "Now weekly"}, headers=auth(owner_token))
    assert r.status_code == 200
    assert r.json()["action"]["summary"] == "Now weekly"
    assert r.json()["action"]["name"] == "River watch"


def test_register_create_join_until_full(client):
    owner_token, _ = register(client, "Owner")
    second_token, second = register(client, "Second")
    third_token, _ = register(client, "Third")
    action = _create(client, owner_token, maxParticipants=1)

    r = client.post(f"/api/v1/actions/{action['id']}/join", json=JOIN_FORM, headers=auth(second_token))
    assert r.status_code == 201
    body = r.json()
    assert body["pointIndex"] == 0
    assert body["participantCount"] == 1
    assert body["participation"]["userId"] == second["id"]

    r = client.post(f"/api/v1/actions/{action['id']}/join", json=JOIN_FORM, headers=auth(third_token))
    assert r.status_code == 409

    detail = client.get(f"/api/v1/actions/{action['id']}").json()
    assert len(detail["action"]["participants"]) == 1


def test_join_errors(client):
    owner_token, _ = register(client, "Owner")
    token, _ = register(client, "Joiner")
    action = _create(client, owner_token)
    url = f"/api/v1/actions/{action['id']}/join"

    assert client.post(url, json=JOIN_FORM).status_code == 401
    assert client.post("/api/v1/actions/missing/join", json=JOIN_FORM, headers=auth(token)).status_code == 404
    assert client.post(url, json={**JOIN_FORM, "selectedTags": []}, headers=auth(token)).status_code == 400
    assert client.post(url, json={**JOIN_FORM, "phone": ""}, headers=auth(token)).status_code == 400

    assert client.post(url, json=JOIN_FORM, headers=auth(token)).status_code == 201
    assert client.post(url, json=JOIN_FORM, headers=auth(token)).status_code == 409


def test_phone_masked_for_public(client):
    owner_token, _ = register(client, "Owner")
    token, _ = register(client, "Joiner")
    action = _create(client, owner_token)
    client.post(f"/api/v1/actions/{action['id']}/join", json=JOIN_FORM, headers=auth(token))

    public = client.get(f"/api/v1/actions/{action['id']}").json()["participations"][0]
    owner_view = client.get(f"/api/v1/actions/{action['id']}", headers=auth(owner_token)).json()
    self_view = client.get("/api/v1/users/me/participations", headers=auth(token)).json()["data"]
    joiner_view = client.get(f"/api/v1/actions/{action['id']}", headers=auth(token)).json()

    assert public["phone"] != JOIN_FORM["phone"]
    assert owner_view["participations"][0]["phone"] == JOIN_FORM["phone"]
    assert self_view[0]["phone"] == JOIN_FORM["phone"]
    assert joiner_view["participations"][0]["phone"] == JOIN_FORM["phone"]


def test_state_survives_restart(client, settings):
    from fastapi.testclient import TestClient

    from constellation.main import create_app

    token, _ = register(client, "Owner")
    action = _create(client, token)

    restarted = TestClient(create_app(settings))
    assert restarted.get(f"/api/v1/actions/{action['id']}").status_code == 200
    assert restarted.post(
        "/api/v1/auth/login", json={"email": "owner@example.com", "password": "secret123"}
    ).status_code == 200
