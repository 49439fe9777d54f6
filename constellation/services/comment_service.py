# constellation/services/comment_service.py
from __future__ import annotations

import logging
from typing import Optional, Tuple

from constellation.core.errors import Forbidden, NotFound, ValidationFailed
from constellation.models import Comment
from constellation.models.base import generate_id, utcnow_iso
from constellation.policies.comment_policy import ReplyPolicy, owner_may_reply
from constellation.policies.rbac import Principal
from constellation.store import Store

logger = logging.getLogger(__name__)


def _clean_body(text: Optional[str], image_url: Optional[str]) -> Tuple[str, Optional[str]]:
    text = (text or "").strip()
    image_url = (image_url or "").strip() or None

    if image_url and not image_url.startswith(("http://", "https://")):
        raise ValidationFailed("imageUrl must be an http(s) URL.")
    if not text and not image_url:
        raise ValidationFailed("Comment text or image is required.")
    return text, image_url


class CommentService:
    """
    Comments are one level deep: replies attach to top-level comments only
    and carry an empty replies list of their own.
    """

    def __init__(self, reply_policy: ReplyPolicy = owner_may_reply):
        self.reply_policy = reply_policy

    def add_comment(
        self,
        store: Store,
        *,
        action_id: str,
        principal: Principal,
        text: Optional[str],
        image_url: Optional[str] = None,
    ) -> Comment:
        with store.transaction():
            action = store.get_action(action_id)
            if not action:
                raise NotFound("Action not found.")

            text, image_url = _clean_body(text, image_url)
            comment = Comment(
                id=generate_id("cmt"),
                action_id=action.id,
                user_id=principal.user_id,
                author=principal.display_name,
                avatar=principal.avatar,
                text=text,
                image_url=image_url,
                created_at=utcnow_iso(),
                replies=[],
            )
            action.comments.append(comment)
            created = comment.model_copy(deep=True)

        logger.info(
            "comment added",
            extra={"action_id": action_id, "comment_id": created.id, "user_id": principal.user_id},
        )
        return created

    def add_reply(
        self,
        store: Store,
        *,
        parent_comment_id: str,
        principal: Principal,
        text: Optional[str],
        image_url: Optional[str] = None,
    ) -> Comment:
        text, image_url = _clean_body(text, image_url)

        with store.transaction():
            found = store.find_top_level_comment(parent_comment_id)
            if not found:
                raise NotFound("Comment not found.")
            action, parent = found

            if not self.reply_policy(principal, action):
                raise Forbidden("Not permitted to reply to comments on this action.")

            reply = Comment(
                id=generate_id("reply"),
                action_id=action.id,
                user_id=principal.user_id,
                author=principal.display_name,
                avatar=principal.avatar,
                text=text,
                image_url=image_url,
                parent_id=parent.id,
                created_at=utcnow_iso(),
                replies=[],
            )
            parent.replies.append(reply)
            created = reply.model_copy(deep=True)

        logger.info(
            "reply added",
            extra={"parent_id": parent_comment_id, "comment_id": created.id, "user_id": principal.user_id},
        )
        return created
