# constellation/store/snapshot.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from pydantic import Field

from constellation.models import Action, Interaction, Participation, User
from constellation.models.base import Record

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 1


class Snapshot(Record):
    """
    The whole persisted state. Backends load and save it wholesale.
    """

    schema_version: int = CURRENT_SCHEMA_VERSION
    users: List[User] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)
    participations: List[Participation] = Field(default_factory=list)
    interactions: List[Interaction] = Field(default_factory=list)


def _upgrade_v0_to_v1(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    v0 is the unversioned layout: stars keyed by "id", interaction type
    "supported", optional lists sometimes missing.
    """
    for action in raw.get("actions", []):
        for key in ("participants", "comments", "uploads", "updates", "resources"):
            action.setdefault(key, [])
        for star in action["participants"]:
            if "userId" not in star and "id" in star:
                star["userId"] = star.pop("id")
        for comment in action["comments"]:
            comment.setdefault("replies", [])

    for interaction in raw.get("interactions", []):
        if interaction.get("type") == "supported":
            interaction["type"] = "support"

    raw.setdefault("users", [])
    raw.setdefault("participations", [])
    raw.setdefault("interactions", [])
    raw["schemaVersion"] = 1
    return raw


_UPGRADES = {
    0: _upgrade_v0_to_v1,
}


def upgrade_snapshot(raw: Dict[str, Any]) -> Snapshot:
    """
    Bring a raw persisted document up to CURRENT_SCHEMA_VERSION and validate it.
    Refuses documents written by a newer version.
    """
    version = int(raw.get("schemaVersion", 0))
    if version > CURRENT_SCHEMA_VERSION:
        raise ValueError(
            f"Snapshot schema version {version} is newer than supported {CURRENT_SCHEMA_VERSION}."
        )

    while version < CURRENT_SCHEMA_VERSION:
        logger.info("upgrading snapshot", extra={"from_version": version})
        raw = _UPGRADES[version](raw)
        version = int(raw["schemaVersion"])

    return Snapshot.model_validate(raw)
