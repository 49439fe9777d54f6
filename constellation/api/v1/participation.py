# constellation/api/v1/participation.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from constellation.api.v1.serializers import participation_json
from constellation.core.auth_deps import get_current_principal
from constellation.core.deps import get_store
from constellation.policies.rbac import Principal
from constellation.schemas.actions import JoinRequest
from constellation.services.participation_service import ParticipationService
from constellation.store import Store

router = APIRouter()


@router.post("/actions/{action_id}/join", status_code=201)
async def join_action(
    action_id: str,
    body: JoinRequest,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    result = ParticipationService().join(
        store,
        action_id=action_id,
        principal=principal,
        motivation=body.motivation,
        selected_tags=body.selected_tags,
        resource_description=body.resource_description,
        phone=body.phone,
    )
    return {
        "participation": participation_json(result.participation, reveal_contact=True),
        "pointIndex": result.point_index,
        "participantCount": result.participant_count,
    }


@router.get("/users/me/participations")
async def my_participations(
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    rows = ParticipationService().list_for_user(store, principal.user_id)
    return {"data": [participation_json(p, reveal_contact=True) for p in rows]}
