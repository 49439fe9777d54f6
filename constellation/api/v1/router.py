from fastapi import APIRouter

from constellation.api.v1.health import router as health_router
from constellation.api.v1.auth import router as auth_router

from constellation.api.v1.actions import router as actions_router
from constellation.api.v1.participation import router as participation_router
from constellation.api.v1.interactions import router as interactions_router
from constellation.api.v1.comments import router as comments_router
from constellation.api.v1.outcomes import router as outcomes_router
from constellation.api.v1.recommend import router as recommend_router

v1_router = APIRouter()

v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

v1_router.include_router(actions_router, tags=["actions"])
v1_router.include_router(participation_router, tags=["participation"])
v1_router.include_router(interactions_router, tags=["interactions"])
v1_router.include_router(comments_router, tags=["comments"])
v1_router.include_router(outcomes_router, tags=["outcomes"])
v1_router.include_router(recommend_router, tags=["ai"])
