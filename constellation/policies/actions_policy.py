#/constellation/policies/actions_policy.py
from __future__ import annotations

from typing import Optional

from constellation.models import Action
from constellation.policies.rbac import Principal


def is_owner_or_admin(principal: Optional[Principal], action: Action) -> bool:
    if principal is None:
        return False
    return principal.is_admin or action.owner_id == principal.user_id


def can_update_action(principal: Principal, action: Action) -> bool:
    return is_owner_or_admin(principal, action)


def can_manage_outcomes(principal: Principal, action: Action) -> bool:
    return is_owner_or_admin(principal, action)


def can_view_contact_details(principal: Optional[Principal], action: Action) -> bool:
    # participants' phone numbers are for the organiser only
    return is_owner_or_admin(principal, action)
