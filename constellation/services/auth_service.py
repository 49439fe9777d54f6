# constellation/services/auth_service.py
from __future__ import annotations

import logging
from typing import Optional

from jose import JWTError

from constellation.core.config import Settings
from constellation.core.errors import Conflict, Unauthorized
from constellation.core.security import create_access_token, decode_token, hash_password, verify_password
from constellation.models import User, UserRole
from constellation.models.base import generate_id
from constellation.models.user import default_avatar
from constellation.store import Store

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, settings: Settings):
        self.settings = settings

    def issue_token(self, user: User) -> str:
        return create_access_token(
            subject=user.id,
            claims={"role": user.role.value},
            settings=self.settings,
        )

    def register(
        self,
        store: Store,
        *,
        name: str,
        email: str,
        password: str,
        avatar: Optional[str] = None,
    ) -> User:
        email = email.strip().lower()
        # hash outside the lock
        password_hash = hash_password(password)

        with store.transaction():
            if store.get_user_by_email(email):
                raise Conflict("Email already registered.")

            user = User(
                id=generate_id("user"),
                name=name.strip(),
                email=email,
                avatar=avatar or default_avatar(name.strip()),
                password_hash=password_hash,
                role=UserRole.user,
            )
            store.add_user(user)
            created = user.model_copy()

        logger.info("user registered", extra={"user_id": created.id})
        return created

    def authenticate(self, store: Store, email: str, password: str) -> User | None:
        with store.lock:
            user = store.get_user_by_email(email)
            user = user.model_copy() if user else None

        if not user:
            return None

        if not verify_password(password, user.password_hash):
            return None

        return user

    def resolve_token(self, store: Store, token: str) -> User:
        try:
            payload = decode_token(token, settings=self.settings)
        except JWTError:
            raise Unauthorized("Invalid or expired token.")

        user_id = payload.get("sub")
        if not user_id:
            raise Unauthorized("Token missing required claims.")

        with store.lock:
            user = store.get_user(str(user_id))
            if not user:
                raise Unauthorized("User not found.")
            return user.model_copy()
