from __future__ import annotations

from typing import List, Tuple

from constellation.core.security import hash_password
from constellation.models import Action, ActionStatus, User, UserRole
from constellation.models.user import default_avatar
from constellation.store.snapshot import Snapshot

DEMO_USER_ID = "user-demo"
ADMIN_USER_ID = "user-admin"


def _points(coords: List[Tuple[float, float]]) -> List[dict]:
    return [{"x": x, "y": y} for x, y in coords]


def _stars(action_id: str, slots: List[int]) -> List[dict]:
    # seeded stars belong to guests who joined before accounts existed
    return [
        {"userId": f"guest-{n}", "key": f"guest-{n}-{action_id}", "pointIndex": slot}
        for n, slot in enumerate(slots, start=1)
    ]


def seed_users() -> List[User]:
    return [
        User(
            id=DEMO_USER_ID,
            name="Demo User",
            email="demo@example.com",
            avatar=default_avatar("Demo User"),
            password_hash=hash_password("password123"),
            role=UserRole.user,
        ),
        User(
            id=ADMIN_USER_ID,
            name="Grace Admin",
            email="admin@example.com",
            avatar=default_avatar("Grace Admin"),
            password_hash=hash_password("admin123"),
            role=UserRole.admin,
        ),
    ]


def seed_actions() -> List[Action]:
    raw = [
        {
            "id": "const-1",
            "name": "Give good furniture a second life for disaster rebuilding",
            "category": "Social Welfare",
            "region": "Hualien",
            "status": ActionStatus.IN_PROGRESS,
            "summary": "Donate idle furniture so affected families can make a home again.",
            "background": "Families and care centres hit by the flood need basic furniture, "
            "while many households hold pieces in good condition they no longer use.",
            "goals": [
                "Help affected households and welfare sites restore living space quickly.",
                "Extend the life of second-hand furniture.",
                "Run a transparent, traceable donation process.",
            ],
            "howToParticipate": "Register the furniture online, then deliver it yourself "
            "or book the partner moving company.",
            "initiator": "Good Deeds Road",
            "ownerId": DEMO_USER_ID,
            "maxParticipants": 40,
            "participationTags": [
                {"label": "Donate furniture", "target": 30},
                {"label": "Transport", "target": 5, "description": "Vans or trucks"},
                {"label": "Volunteer", "target": 10},
            ],
            "shapePoints": _points([
                (15, 75), (85, 75), (95, 65), (25, 65), (15, 75), (15, 55), (25, 45),
                (25, 25), (95, 25), (95, 45), (85, 55), (15, 55), (85, 55), (85, 75),
            ]),
            "participants": _stars("const-1", [0, 2, 4, 6, 8, 1, 3]),
            "comments": [
                {
                    "id": "c1",
                    "author": "Ms. Wang",
                    "avatar": "https://loremflickr.com/40/40/portrait?random=1",
                    "text": "I have a spare desk in great shape, this makes donating easy!",
                },
                {
                    "id": "c2",
                    "author": "Mr. Chen",
                    "avatar": "https://loremflickr.com/40/40/portrait?random=2",
                    "text": "Do you accept double mattresses in good condition?",
                },
            ],
            "updates": [
                {"date": "2025-11-15", "text": "The second furniture batch is on its way."},
                {"date": "2025-11-10", "text": "First delivery reached the first household."},
            ],
            "uploads": [
                {
                    "id": "u1",
                    "url": "https://loremflickr.com/200/200/moving,truck,furniture?lock=11",
                    "caption": "Logistics partner on the road",
                },
            ],
            "resources": [
                {"id": "r1", "type": "labour", "description": "Professional removals", "provider": "Da Ai Movers"},
            ],
        },
        {
            "id": "const-2",
            "name": "Forest discovery day: meet adoptable dogs",
            "category": "Animal Protection",
            "region": "Tainan",
            "status": ActionStatus.PENDING,
            "summary": "Thinking about adopting? Spend an afternoon with mixed-breed dogs first.",
            "background": "Photos rarely tell you whether a dog fits your life. "
            "This session lets families meet dogs with a trainer on hand.",
            "goals": [
                "Help people understand the responsibility of keeping a dog.",
                "Match families with dogs through real interaction.",
            ],
            "howToParticipate": "Sign up as a family group; sessions are free and limited.",
            "initiator": "IxDA Taiwan",
            "ownerId": ADMIN_USER_ID,
            "maxParticipants": 12,
            "participationTags": [],
            "shapePoints": _points([
                (30, 20), (15, 35), (30, 50), (60, 50), (85, 30), (75, 50), (75, 75), (65, 75),
                (65, 55), (40, 55), (40, 75), (30, 75), (30, 50), (45, 22), (30, 20), (75, 50),
            ]),
            "participants": _stars("const-2", [3, 9, 0, 1, 2]),
        },
        {
            "id": "const-3",
            "name": "Build a safe, sustainable campus",
            "category": "Education",
            "region": "Nationwide",
            "status": ActionStatus.IN_PROGRESS,
            "summary": "Schools, families and volunteers working on greener, safer campuses.",
            "background": "Campus safety and sustainability improve fastest when the "
            "whole community takes part.",
            "goals": ["Run safety workshops.", "Plant shade trees on school grounds."],
            "howToParticipate": "Pick a role below and tell us what you can offer.",
            "initiator": "Cathay Life",
            "ownerId": DEMO_USER_ID,
            "maxParticipants": 55,
            "participationTags": [
                {"label": "Workshop host"},
                {"label": "Tree planting"},
            ],
            "shapePoints": _points([
                (40, 75), (45, 55), (15, 50), (20, 30), (35, 10), (50, 5), (65, 10), (80, 30),
                (85, 50), (55, 55), (60, 75), (55, 55), (70, 40), (50, 25), (30, 40), (45, 55),
            ]),
            "participants": _stars("const-3", [0, 1]),
        },
        {
            "id": "const-4",
            "name": "Green supply chains start with reusable packaging",
            "category": "Environment",
            "region": "Nationwide",
            "status": ActionStatus.COMPLETED,
            "summary": "Companies switching shipments to reusable packaging.",
            "background": "Single-use shipping boxes are a large, avoidable waste stream.",
            "goals": ["Replace single-use boxes in partner logistics."],
            "howToParticipate": "Companies can register a pilot route.",
            "initiator": "PackAge+",
            "ownerId": ADMIN_USER_ID,
            "maxParticipants": 35,
            "participationTags": [{"label": "Pilot route"}],
            "shapePoints": _points([
                (20, 70), (80, 70), (95, 55), (35, 55), (20, 70), (20, 30), (80, 30), (95, 15),
                (35, 15), (20, 30), (80, 70), (80, 30), (95, 55), (95, 15), (35, 55), (35, 15),
            ]),
            "sroiReport": {
                "lastUpdated": "2025-10-01",
                "currencyUnit": "TWD",
                "sroiRatio": 3.2,
                "totalImpactValue": 1600000,
                "inputs": [{"name": "Programme budget", "value": "500,000", "amount": 500000}],
                "outputs": [{"name": "Reusable boxes shipped", "value": "12,000"}],
                "outcomes": [
                    {
                        "name": "Packaging waste avoided",
                        "value": "8 tonnes",
                        "monetizedValue": 1600000,
                    }
                ],
            },
        },
    ]
    return [Action.model_validate(item) for item in raw]


def seed_snapshot() -> Snapshot:
    return Snapshot(users=seed_users(), actions=seed_actions())


def seed() -> None:
    """Write the seed dataset to the configured backend, replacing its contents."""
    from constellation.core.config import get_settings
    from constellation.store import build_backend

    build_backend(get_settings()).save(seed_snapshot())


if __name__ == "__main__":
    seed()
