from constellation.models import Action, ActionStatus, UserRole
from constellation.policies.rbac import Principal


def make_principal(user_id="user-1", role=UserRole.user, name=None):
    return Principal(user_id=user_id, role=role, display_name=name or user_id)


def make_action(
    action_id="act-1",
    *,
    owner_id="owner-1",
    max_participants=10,
    points=6,
    tags=(),
    category="Environment",
    name="Beach cleanup",
):
    return Action(
        id=action_id,
        name=name,
        category=category,
        status=ActionStatus.PENDING,
        summary=f"{name} summary",
        background="",
        owner_id=owner_id,
        initiator=owner_id,
        max_participants=max_participants,
        participation_tags=[{"label": t} for t in tags],
        shape_points=[{"x": i, "y": i} for i in range(points)],
    )


def action_payload(**overrides):
    body = {
        "name": "River watch",
        "category": "Environment",
        "region": "Taipei",
        "status": "PENDING",
        "summary": "Monthly river water sampling.",
        "background": "Nobody measures the creek.",
        "goals": ["Publish readings"],
        "howToParticipate": "Bring a bottle.",
        "initiator": "Tester",
        "participationTags": [{"label": "Sampler"}, {"label": "Note taker"}],
        "maxParticipants": 5,
        "shapePoints": [{"x": 10, "y": 10}, {"x": 20, "y": 15}, {"x": 30, "y": 12}],
    }
    body.update(overrides)
    return body


def register(client, name="Alice", email=None, password="secret123"):
    email = email or f"{name.lower()}@example.com"
    res = client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert res.status_code == 200, res.text
    data = res.json()
    return data["token"], data["user"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}
