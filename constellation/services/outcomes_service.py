from __future__ import annotations

import logging
from typing import Optional

from constellation.core.errors import Forbidden, NotFound, ValidationFailed
from constellation.models import Action, OutcomeUpload
from constellation.models.base import generate_id
from constellation.policies.actions_policy import can_manage_outcomes
from constellation.policies.rbac import Principal
from constellation.store import Store

logger = logging.getLogger(__name__)


class OutcomesService:
    """Outcome gallery on an action; the only editable part of its history."""

    def _managed_action(self, store: Store, action_id: str, principal: Principal) -> Action:
        action = store.get_action(action_id)
        if not action:
            raise NotFound("Action not found.")
        if not can_manage_outcomes(principal, action):
            raise Forbidden("Not authorized.")
        return action

    def add(
        self,
        store: Store,
        *,
        action_id: str,
        principal: Principal,
        url: Optional[str],
        caption: Optional[str] = None,
    ) -> OutcomeUpload:
        with store.transaction():
            action = self._managed_action(store, action_id, principal)
            url = (url or "").strip()
            if not url:
                raise ValidationFailed("Outcome URL is required.")

            upload = OutcomeUpload(id=generate_id("upload"), url=url, caption=caption or "")
            action.uploads.append(upload)
            created = upload.model_copy()

        logger.info("outcome added", extra={"action_id": action_id, "upload_id": created.id})
        return created

    def update(
        self,
        store: Store,
        *,
        action_id: str,
        upload_id: str,
        principal: Principal,
        url: Optional[str] = None,
        caption: Optional[str] = None,
    ) -> OutcomeUpload:
        with store.transaction():
            action = self._managed_action(store, action_id, principal)
            upload = next((u for u in action.uploads if u.id == upload_id), None)
            if not upload:
                raise NotFound("Outcome not found.")

            if url is not None:
                if not url.strip():
                    raise ValidationFailed("Outcome URL cannot be blank.")
                upload.url = url.strip()
            if caption is not None:
                upload.caption = caption
            updated = upload.model_copy()

        logger.info("outcome updated", extra={"action_id": action_id, "upload_id": upload_id})
        return updated

    def delete(self, store: Store, *, action_id: str, upload_id: str, principal: Principal) -> None:
        with store.transaction():
            action = self._managed_action(store, action_id, principal)
            remaining = [u for u in action.uploads if u.id != upload_id]
            if len(remaining) == len(action.uploads):
                raise NotFound("Outcome not found.")
            action.uploads = remaining

        logger.info("outcome deleted", extra={"action_id": action_id, "upload_id": upload_id})
