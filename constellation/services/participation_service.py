# constellation/services/participation_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from constellation.core.errors import Conflict, NotFound, ValidationFailed
from constellation.models import Action, Participation, Star
from constellation.models.base import generate_id
from constellation.policies.rbac import Principal
from constellation.store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinResult:
    participation: Participation
    point_index: int
    participant_count: int


def next_point_index(action: Action) -> int:
    """
    Lowest shape-point index not held by a current participant. Once every
    point is taken, wrap around with participants mod point count.
    """
    n = len(action.shape_points)
    used = {star.point_index for star in action.participants}
    for i in range(n):
        if i not in used:
            return i
    return len(action.participants) % n


def _clean_tags(selected_tags: List[str]) -> List[str]:
    seen = []
    for tag in selected_tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _required(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationFailed(f"{field} is required.")
    return value


class ParticipationService:
    def join(
        self,
        store: Store,
        *,
        action_id: str,
        principal: Principal,
        motivation: str,
        selected_tags: List[str],
        resource_description: str,
        phone: str,
    ) -> JoinResult:
        with store.transaction():
            action = store.get_action(action_id)
            if not action:
                raise NotFound("Action not found.")

            motivation = _required(motivation, "Motivation")
            resource_description = _required(resource_description, "Resource description")
            phone = _required(phone, "Phone")
            tags = _clean_tags(selected_tags)

            if store.get_participation(action.id, principal.user_id):
                raise Conflict("Already joined this action.")

            if action.is_full():
                raise Conflict("Action is full.")

            labels = action.tag_labels()
            if labels and not tags:
                raise ValidationFailed("Please select at least one participation tag.")

            unknown = [t for t in tags if t not in labels]
            if unknown:
                raise ValidationFailed(f"Unknown participation tag: {', '.join(unknown)}")

            point_index = next_point_index(action)

            participation = Participation(
                id=generate_id("part"),
                action_id=action.id,
                user_id=principal.user_id,
                motivation=motivation,
                selected_tags=tags,
                resource_description=resource_description,
                phone=phone,
                point_index=point_index,
            )
            store.add_participation(participation)
            action.participants.append(
                Star(
                    user_id=principal.user_id,
                    key=f"{principal.user_id}-{action.id}",
                    point_index=point_index,
                )
            )

            result = JoinResult(
                participation=participation.model_copy(deep=True),
                point_index=point_index,
                participant_count=len(action.participants),
            )

        logger.info(
            "participant joined",
            extra={
                "action_id": action_id,
                "user_id": principal.user_id,
                "point_index": point_index,
                "participant_count": result.participant_count,
            },
        )
        return result

    def list_for_action(self, store: Store, action_id: str) -> List[Participation]:
        with store.lock:
            return [p.model_copy(deep=True) for p in store.list_participations(action_id=action_id)]

    def list_for_user(self, store: Store, user_id: str) -> List[Participation]:
        with store.lock:
            return [p.model_copy(deep=True) for p in store.list_participations(user_id=user_id)]
