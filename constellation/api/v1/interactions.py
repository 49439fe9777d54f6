from fastapi import APIRouter, Depends

from constellation.core.auth_deps import get_current_principal
from constellation.core.deps import get_store
from constellation.policies.rbac import Principal
from constellation.schemas.actions import InteractRequest
from constellation.services.interaction_service import InteractionService
from constellation.store import Store

router = APIRouter()


@router.post("/actions/{action_id}/interact")
async def interact(
    action_id: str,
    body: InteractRequest,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    result = InteractionService().toggle(
        store, action_id=action_id, user_id=principal.user_id, type_=body.type
    )
    return {
        "status": "ok",
        "active": result.active,
        "summary": result.summary,
        "interestedIds": result.interested_ids,
    }


@router.get("/users/me/interested")
async def my_interested(
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    return {"actionIds": InteractionService().interested_ids(store, principal.user_id)}
