from __future__ import annotations
from enum import Enum


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class ActionStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class InteractionType(str, Enum):
    # canonical spelling; "supported" from older snapshots is upgraded on load
    support = "support"
    meaningful = "meaningful"
    interested = "interested"
