#constellation/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from constellation.models import User, UserRole


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: UserRole
    display_name: str
    avatar: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            user_id=user.id,
            role=user.role,
            display_name=user.name,
            avatar=user.avatar,
        )
