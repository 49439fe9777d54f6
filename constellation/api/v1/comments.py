#constellation/api/v1/comments.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from constellation.core.auth_deps import get_current_principal
from constellation.core.deps import get_comment_service, get_store
from constellation.policies.rbac import Principal
from constellation.schemas.actions import CommentRequest
from constellation.services.comment_service import CommentService
from constellation.store import Store

router = APIRouter()


@router.post("/actions/{action_id}/comments", status_code=201)
async def add_comment(
    action_id: str,
    body: CommentRequest,
    store: Store = Depends(get_store),
    svc: CommentService = Depends(get_comment_service),
    principal: Principal = Depends(get_current_principal),
):
    comment = svc.add_comment(
        store,
        action_id=action_id,
        principal=principal,
        text=body.text,
        image_url=body.image_url,
    )
    return {"comment": comment.to_json()}


@router.post("/comments/{comment_id}/reply", status_code=201)
async def reply_to_comment(
    comment_id: str,
    body: CommentRequest,
    store: Store = Depends(get_store),
    svc: CommentService = Depends(get_comment_service),
    principal: Principal = Depends(get_current_principal),
):
    reply = svc.add_reply(
        store,
        parent_comment_id=comment_id,
        principal=principal,
        text=body.text,
        image_url=body.image_url,
    )
    return {"reply": reply.to_json()}
