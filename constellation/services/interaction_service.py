# constellation/services/interaction_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from constellation.core.errors import NotFound, ValidationFailed
from constellation.models import Interaction, InteractionType
from constellation.models.base import generate_id
from constellation.store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    active: bool
    summary: Dict[str, int]
    interested_ids: List[str]


def empty_summary() -> Dict[str, int]:
    return {t.value: 0 for t in InteractionType}


def parse_interaction_type(raw: str) -> InteractionType:
    try:
        return InteractionType((raw or "").strip())
    except ValueError:
        raise ValidationFailed("Invalid interaction type.") from None


class InteractionService:
    def toggle(self, store: Store, *, action_id: str, user_id: str, type_: str) -> ToggleResult:
        """
        Pure toggle: deletes the (action, user, type) record when present,
        creates it otherwise. The returned interested ids cover every action,
        not only this one.
        """
        with store.transaction():
            if not store.get_action(action_id):
                raise NotFound("Action not found.")

            kind = parse_interaction_type(type_)

            existing = store.find_interaction(action_id, user_id, kind)
            if existing:
                store.remove_interaction(existing.id)
                active = False
            else:
                store.add_interaction(
                    Interaction(
                        id=generate_id("ia"),
                        action_id=action_id,
                        user_id=user_id,
                        type=kind,
                    )
                )
                active = True

            result = ToggleResult(
                active=active,
                summary=self._summary(store, action_id),
                interested_ids=self._interested_ids(store, user_id),
            )

        logger.info(
            "interaction toggled",
            extra={"action_id": action_id, "user_id": user_id, "type": kind.value, "active": active},
        )
        return result

    def summary(self, store: Store, action_id: str) -> Dict[str, int]:
        with store.lock:
            return self._summary(store, action_id)

    def summaries(self, store: Store) -> Dict[str, Dict[str, int]]:
        with store.lock:
            out: Dict[str, Dict[str, int]] = {}
            for i in store.list_interactions():
                out.setdefault(i.action_id, empty_summary())[i.type.value] += 1
            return out

    def interested_ids(self, store: Store, user_id: str) -> List[str]:
        with store.lock:
            return self._interested_ids(store, user_id)

    def _summary(self, store: Store, action_id: str) -> Dict[str, int]:
        summary = empty_summary()
        for i in store.list_interactions(action_id=action_id):
            summary[i.type.value] += 1
        return summary

    def _interested_ids(self, store: Store, user_id: str) -> List[str]:
        return [
            i.action_id
            for i in store.list_interactions(user_id=user_id, type_=InteractionType.interested)
        ]
