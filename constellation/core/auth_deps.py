#constellation/core/auth_deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from constellation.core.config import Settings
from constellation.core.deps import get_app_settings, get_store
from constellation.core.errors import Unauthorized
from constellation.policies.rbac import Principal
from constellation.services.auth_service import AuthService
from constellation.store import Store

# auto_error=False: a missing header must surface as 401, not FastAPI's default
bearer = HTTPBearer(auto_error=False)


def _token_from(request: Request, creds: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if creds and creds.credentials:
        return creds.credentials
    return request.cookies.get("token")


def get_current_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - a bearer token (or `token` cookie) is present
    - signature and expiry are valid
    - the subject resolves to an existing user
    """
    token = _token_from(request, creds)
    if not token:
        raise Unauthorized("Authentication required.")

    user = AuthService(settings).resolve_token(store, token)
    principal = Principal.from_user(user)

    # Make principal available to downstream middleware / handlers
    request.state.principal = principal
    return principal


def get_optional_principal(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Optional[Principal]:
    """Public routes: identify the caller when possible, ignore bad tokens."""
    token = _token_from(request, creds)
    if not token:
        return None
    try:
        user = AuthService(settings).resolve_token(store, token)
    except Unauthorized:
        return None
    return Principal.from_user(user)
