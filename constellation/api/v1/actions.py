# constellation/api/v1/actions.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from constellation.api.v1.serializers import action_json, participation_json
from constellation.core.auth_deps import get_current_principal, get_optional_principal
from constellation.core.deps import get_store
from constellation.policies.actions_policy import can_view_contact_details
from constellation.policies.rbac import Principal
from constellation.schemas.actions import ActionCreateRequest, ActionPatchRequest
from constellation.services.actions_service import ActionFilters, ActionsService
from constellation.services.interaction_service import InteractionService
from constellation.services.participation_service import ParticipationService
from constellation.store import Store

router = APIRouter(prefix="/actions")


@router.get("")
async def list_actions(
    category: Optional[str] = Query(default=None),
    region: Optional[str] = Query(default=None),
    status: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    page_size: Optional[int] = Query(default=None, alias="pageSize"),
    store: Store = Depends(get_store),
):
    rows, total, page, page_size = ActionsService().list(
        store,
        filters=ActionFilters(category=category, region=region, status=status, search=search),
        page=page,
        page_size=page_size,
    )
    summaries = InteractionService().summaries(store)
    return {
        "data": [action_json(a, summaries.get(a.id)) for a in rows],
        "page": page,
        "pageSize": page_size,
        "total": total,
    }


@router.get("/{action_id}")
async def get_action(
    action_id: str,
    store: Store = Depends(get_store),
    principal: Optional[Principal] = Depends(get_optional_principal),
):
    action = ActionsService().get(store, action_id)
    summary = InteractionService().summary(store, action.id)
    reveal = can_view_contact_details(principal, action)
    caller_id = principal.user_id if principal else None

    return {
        "action": action_json(action, summary),
        "participations": [
            participation_json(p, reveal_contact=reveal or p.user_id == caller_id)
            for p in ParticipationService().list_for_action(store, action.id)
        ],
    }


@router.post("", status_code=201)
async def create_action(
    body: ActionCreateRequest,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    action = ActionsService().create(store, principal=principal, payload=body)
    return {"action": action_json(action)}


@router.put("/{action_id}")
async def update_action(
    action_id: str,
    body: ActionPatchRequest,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    action = ActionsService().update(store, principal=principal, action_id=action_id, patch=body)
    summary = InteractionService().summary(store, action.id)
    return {"action": action_json(action, summary)}
