# constellation/services/actions_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from constellation.core.errors import Forbidden, NotFound, ValidationFailed
from constellation.models import Action
from constellation.models.base import generate_id
from constellation.policies.actions_policy import can_update_action
from constellation.policies.rbac import Principal
from constellation.schemas.actions import ActionCreateRequest, ActionPatchRequest
from constellation.store import Store

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50

# fields an update may leave out but never set to null
NON_NULLABLE_FIELDS = {
    "name",
    "category",
    "status",
    "summary",
    "background",
    "goals",
    "how_to_participate",
    "initiator",
    "participation_tags",
    "max_participants",
    "shape_points",
    "updates",
}


@dataclass(frozen=True)
class ActionFilters:
    category: Optional[str] = None
    region: Optional[str] = None
    status: Optional[str] = None
    search: Optional[str] = None

    def matches(self, action: Action) -> bool:
        if self.category and action.category.lower() != self.category.lower():
            return False
        if self.region and (action.region or "").lower() != self.region.lower():
            return False
        if self.status and action.status.value.lower() != self.status.lower():
            return False
        if self.search:
            needle = self.search.lower()
            haystacks = (action.name, action.summary, action.background)
            if not any(needle in h.lower() for h in haystacks):
                return False
        return True


def clamp_paging(page: Optional[int], page_size: Optional[int]) -> Tuple[int, int]:
    page = max(page or 1, 1)
    page_size = DEFAULT_PAGE_SIZE if page_size is None else page_size
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return page, page_size


class ActionsService:
    def list(
        self,
        store: Store,
        *,
        filters: ActionFilters,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[Action], int, int, int]:
        """Returns (rows, total, page, page_size) after clamping."""
        page, page_size = clamp_paging(page, page_size)
        with store.lock:
            matched = [a for a in store.list_actions() if filters.matches(a)]
            start = (page - 1) * page_size
            rows = [a.model_copy(deep=True) for a in matched[start:start + page_size]]
        return rows, len(matched), page, page_size

    def get(self, store: Store, action_id: str) -> Action:
        with store.lock:
            action = store.get_action(action_id)
            if not action:
                raise NotFound("Action not found.")
            return action.model_copy(deep=True)

    def create(self, store: Store, *, principal: Principal, payload: ActionCreateRequest) -> Action:
        action = Action(
            id=generate_id("action"),
            owner_id=principal.user_id,
            name=payload.name,
            category=payload.category,
            region=payload.region,
            status=payload.status,
            summary=payload.summary,
            background=payload.background,
            goals=list(payload.goals),
            how_to_participate=payload.how_to_participate,
            initiator=payload.initiator,
            max_participants=payload.max_participants,
            participation_tags=[t.model_copy() for t in payload.participation_tags],
            shape_points=[p.model_copy() for p in payload.shape_points],
            updates=[u.model_copy() for u in payload.updates],
            sroi_report=payload.sroi_report.model_copy(deep=True) if payload.sroi_report else None,
            participants=[],
            comments=[],
            uploads=[],
            resources=[],
        )
        with store.transaction():
            store.add_action(action)
            created = action.model_copy(deep=True)

        logger.info("action created", extra={"action_id": created.id, "owner_id": principal.user_id})
        return created

    def update(
        self,
        store: Store,
        *,
        principal: Principal,
        action_id: str,
        patch: ActionPatchRequest,
    ) -> Action:
        with store.transaction():
            action = store.get_action(action_id)
            if not action:
                raise NotFound("Action not found.")
            if not can_update_action(principal, action):
                raise Forbidden("Not authorized to update.")

            for field in sorted(patch.model_fields_set):
                value = getattr(patch, field)
                if value is None and field in NON_NULLABLE_FIELDS:
                    raise ValidationFailed(f"{field} cannot be null.")

                if field == "shape_points" and len(value) < len(action.shape_points):
                    raise ValidationFailed(
                        "shapePoints cannot shrink: existing points may be held by participants."
                    )
                if field == "max_participants" and value < len(action.participants):
                    raise ValidationFailed(
                        "maxParticipants cannot be lower than the current participant count."
                    )

                setattr(action, field, value)

            updated = action.model_copy(deep=True)

        logger.info(
            "action updated",
            extra={"action_id": action_id, "fields": sorted(patch.model_fields_set)},
        )
        return updated
