from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """
    Base for persisted records: snake_case attributes, camelCase on the wire
    and in snapshots.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def generate_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4()}"


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
