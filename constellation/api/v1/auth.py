#constellation/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from constellation.core.auth_deps import get_current_principal
from constellation.core.config import Settings
from constellation.core.deps import get_app_settings, get_store
from constellation.core.errors import NotFound, Unauthorized
from constellation.policies.rbac import Principal
from constellation.schemas.auth import LoginRequest, RegisterRequest
from constellation.services.auth_service import AuthService
from constellation.store import Store

router = APIRouter(prefix="/auth")


@router.post("/register")
async def register(
    req: RegisterRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    svc = AuthService(settings)
    user = svc.register(
        store,
        name=req.name,
        email=str(req.email),
        password=req.password,
        avatar=req.avatar,
    )
    return {"token": svc.issue_token(user), "user": user.to_public()}


@router.post("/login")
async def login(
    req: LoginRequest,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    svc = AuthService(settings)
    user = svc.authenticate(store, str(req.email), req.password)
    if not user:
        raise Unauthorized("Invalid credentials.")

    return {"token": svc.issue_token(user), "user": user.to_public()}


@router.get("/me")
def get_me(
    principal: Principal = Depends(get_current_principal),
    store: Store = Depends(get_store),
):
    with store.lock:
        user = store.get_user(principal.user_id)
        if not user:
            raise NotFound("User not found.")
        return {"user": user.to_public()}
