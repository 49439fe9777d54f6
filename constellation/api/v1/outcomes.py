from __future__ import annotations

from fastapi import APIRouter, Depends

from constellation.core.auth_deps import get_current_principal
from constellation.core.deps import get_store
from constellation.policies.rbac import Principal
from constellation.schemas.actions import OutcomeCreateRequest, OutcomePatchRequest
from constellation.services.outcomes_service import OutcomesService
from constellation.store import Store

router = APIRouter(prefix="/actions/{action_id}/outcomes")


@router.post("", status_code=201)
async def add_outcome(
    action_id: str,
    body: OutcomeCreateRequest,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    upload = OutcomesService().add(
        store, action_id=action_id, principal=principal, url=body.url, caption=body.caption
    )
    return {"upload": upload.to_json()}


@router.put("/{upload_id}")
async def update_outcome(
    action_id: str,
    upload_id: str,
    body: OutcomePatchRequest,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    upload = OutcomesService().update(
        store,
        action_id=action_id,
        upload_id=upload_id,
        principal=principal,
        url=body.url,
        caption=body.caption,
    )
    return {"upload": upload.to_json()}


@router.delete("/{upload_id}")
async def delete_outcome(
    action_id: str,
    upload_id: str,
    store: Store = Depends(get_store),
    principal: Principal = Depends(get_current_principal),
):
    OutcomesService().delete(store, action_id=action_id, upload_id=upload_id, principal=principal)
    return {"message": "Deleted"}
