from __future__ import annotations

from urllib.parse import quote_plus

from constellation.models.base import Record
from constellation.models.enums import UserRole


class User(Record):
    id: str
    name: str
    email: str
    avatar: str
    password_hash: str
    role: UserRole = UserRole.user

    def to_public(self) -> dict:
        data = self.to_json()
        data.pop("passwordHash", None)
        return data


def default_avatar(name: str) -> str:
    return f"https://ui-avatars.com/api/?name={quote_plus(name)}&color=fff&background=D89C23"
