from __future__ import annotations

from typing import Callable, Dict

from constellation.models import Action
from constellation.policies.actions_policy import is_owner_or_admin
from constellation.policies.rbac import Principal

ReplyPolicy = Callable[[Principal, Action], bool]


def owner_may_reply(principal: Principal, action: Action) -> bool:
    return is_owner_or_admin(principal, action)


def anyone_may_reply(principal: Principal, action: Action) -> bool:
    return True


REPLY_POLICIES: Dict[str, ReplyPolicy] = {
    "owner": owner_may_reply,
    "any": anyone_may_reply,
}


def get_reply_policy(name: str) -> ReplyPolicy:
    try:
        return REPLY_POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown reply policy: {name}") from None
