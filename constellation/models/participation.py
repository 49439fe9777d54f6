from __future__ import annotations

from typing import List

from pydantic import Field

from constellation.models.base import Record, utcnow_iso


class Participation(Record):
    """
    Durable join record. One per (action_id, user_id); never mutated.
    """

    id: str
    action_id: str
    user_id: str
    motivation: str
    selected_tags: List[str] = Field(default_factory=list)
    resource_description: str
    phone: str
    point_index: int = Field(..., ge=0)
    joined_at: str = Field(default_factory=utcnow_iso)
