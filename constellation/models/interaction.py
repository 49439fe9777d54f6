from __future__ import annotations

from pydantic import Field

from constellation.models.base import Record, utcnow_iso
from constellation.models.enums import InteractionType


class Interaction(Record):
    # existence == active; toggling off deletes the record
    id: str
    action_id: str
    user_id: str
    type: InteractionType
    created_at: str = Field(default_factory=utcnow_iso)
