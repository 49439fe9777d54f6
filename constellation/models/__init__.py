from constellation.models.action import (  # noqa: F401
    Action,
    ActionUpdate,
    Comment,
    OutcomeUpload,
    ParticipationTag,
    Resource,
    ShapePoint,
    SroiReport,
    Star,
)
from constellation.models.enums import ActionStatus, InteractionType, UserRole  # noqa: F401
from constellation.models.interaction import Interaction  # noqa: F401
from constellation.models.participation import Participation  # noqa: F401
from constellation.models.user import User  # noqa: F401
