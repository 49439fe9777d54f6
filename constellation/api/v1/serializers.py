from __future__ import annotations

from typing import Dict, Optional

from constellation.core.redaction import mask_phone
from constellation.models import Action, Participation
from constellation.services.interaction_service import empty_summary


def action_json(action: Action, summary: Optional[Dict[str, int]] = None) -> dict:
    data = action.to_json()
    data["interactions"] = summary or empty_summary()
    return data


def participation_json(p: Participation, *, reveal_contact: bool) -> dict:
    data = p.to_json()
    if not reveal_contact:
        data["phone"] = mask_phone(p.phone)
    return data
