# constellation/api/v1/recommend.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from constellation.core.auth_deps import get_optional_principal
from constellation.core.deps import get_recommender, get_store
from constellation.policies.rbac import Principal
from constellation.schemas.actions import RecommendRequest
from constellation.services.recommender import RecommendContext, Recommender
from constellation.store import Store

router = APIRouter(prefix="/ai")


@router.post("/recommend")
async def recommend(
    body: RecommendRequest,
    store: Store = Depends(get_store),
    recommender: Recommender = Depends(get_recommender),
    principal: Optional[Principal] = Depends(get_optional_principal),
):
    # copy out under the lock; the ranking call may be slow
    with store.lock:
        actions = [a.model_copy(deep=True) for a in store.list_actions()]

    context = RecommendContext(
        actions=actions,
        interested_ids=list(body.interested_ids),
        user_id=principal.user_id if principal else None,
    )
    result = await recommender.rank(body.query, context)
    return {"ids": result.ids, "source": result.source}
