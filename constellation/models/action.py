# constellation/models/action.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from constellation.models.base import Record, utcnow_iso
from constellation.models.enums import ActionStatus


class ShapePoint(Record):
    x: float
    y: float


class ParticipationTag(Record):
    label: str
    title: Optional[str] = None
    target: Optional[int] = None
    description: Optional[str] = None


class Star(Record):
    """One participant placed on a shape point."""

    user_id: str
    key: str
    point_index: int = Field(..., ge=0)


class Comment(Record):
    id: str
    action_id: Optional[str] = None
    user_id: Optional[str] = None
    # author/avatar are snapshots taken when the comment was written
    author: str
    avatar: Optional[str] = None
    text: str = ""
    image_url: Optional[str] = None
    parent_id: Optional[str] = None
    created_at: Optional[str] = None
    replies: List["Comment"] = Field(default_factory=list)


class OutcomeUpload(Record):
    id: str
    url: str
    caption: str = ""


class ActionUpdate(Record):
    date: str
    text: str


class Resource(Record):
    id: str
    type: str
    description: str
    provider: str


class SroiInput(Record):
    name: str
    value: str
    amount: Optional[float] = None
    description: Optional[str] = None


class SroiOutput(Record):
    name: str
    value: str
    description: Optional[str] = None


class SroiOutcome(Record):
    name: str
    value: str
    amount: Optional[float] = None
    description: Optional[str] = None
    monetized_value: float


class SroiReport(Record):
    last_updated: str
    currency_unit: str
    sroi_ratio: float
    total_impact_value: float
    inputs: List[SroiInput] = Field(default_factory=list)
    outputs: List[SroiOutput] = Field(default_factory=list)
    outcomes: List[SroiOutcome] = Field(default_factory=list)


class Action(Record):
    id: str
    name: str
    category: str
    region: Optional[str] = None
    status: ActionStatus = ActionStatus.PENDING
    summary: str = ""
    background: str = ""
    goals: List[str] = Field(default_factory=list)
    how_to_participate: str = ""
    initiator: str = ""
    owner_id: str
    max_participants: int = Field(..., gt=0)
    participation_tags: List[ParticipationTag] = Field(default_factory=list)
    shape_points: List[ShapePoint] = Field(..., min_length=1)
    participants: List[Star] = Field(default_factory=list)
    comments: List[Comment] = Field(default_factory=list)
    updates: List[ActionUpdate] = Field(default_factory=list)
    uploads: List[OutcomeUpload] = Field(default_factory=list)
    resources: List[Resource] = Field(default_factory=list)
    sroi_report: Optional[SroiReport] = None
    created_at: str = Field(default_factory=utcnow_iso)

    def tag_labels(self) -> List[str]:
        return [t.label for t in self.participation_tags]

    def is_full(self) -> bool:
        return len(self.participants) >= self.max_participants
