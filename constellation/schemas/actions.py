#constellation/schemas/actions.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from constellation.models import ActionStatus, ActionUpdate, ParticipationTag, ShapePoint, SroiReport
from constellation.schemas.common import ApiModel, NonEmptyStr


class ActionCreateRequest(ApiModel):
    name: NonEmptyStr
    category: NonEmptyStr
    region: Optional[str] = None
    status: ActionStatus
    summary: str
    background: str
    goals: List[str]
    how_to_participate: str
    initiator: str
    participation_tags: List[ParticipationTag]
    max_participants: int = Field(..., gt=0)
    shape_points: List[ShapePoint] = Field(..., min_length=1)
    updates: List[ActionUpdate] = Field(default_factory=list)
    sroi_report: Optional[SroiReport] = None


class ActionPatchRequest(ApiModel):
    """Partial update; only the fields present in the body are applied."""

    name: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    region: Optional[str] = None
    status: Optional[ActionStatus] = None
    summary: Optional[str] = None
    background: Optional[str] = None
    goals: Optional[List[str]] = None
    how_to_participate: Optional[str] = None
    initiator: Optional[str] = None
    participation_tags: Optional[List[ParticipationTag]] = None
    max_participants: Optional[int] = Field(default=None, gt=0)
    shape_points: Optional[List[ShapePoint]] = Field(default=None, min_length=1)
    updates: Optional[List[ActionUpdate]] = None
    sroi_report: Optional[SroiReport] = None


class JoinRequest(ApiModel):
    motivation: str = ""
    selected_tags: List[str] = Field(default_factory=list)
    resource_description: str = ""
    phone: str = ""


class InteractRequest(ApiModel):
    # validated by the service so unknown types surface as a domain error
    type: str = ""


class CommentRequest(ApiModel):
    text: Optional[str] = None
    image_url: Optional[str] = None


class OutcomeCreateRequest(ApiModel):
    url: Optional[str] = None
    caption: Optional[str] = None


class OutcomePatchRequest(ApiModel):
    url: Optional[str] = None
    caption: Optional[str] = None


class RecommendRequest(ApiModel):
    query: str = ""
    interested_ids: List[str] = Field(default_factory=list)
