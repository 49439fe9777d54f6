# /constellation/core/deps.py
from fastapi import Request

from constellation.core.config import Settings
from constellation.services.comment_service import CommentService
from constellation.services.recommender import Recommender
from constellation.store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_recommender(request: Request) -> Recommender:
    return request.app.state.recommender


def get_comment_service(request: Request) -> CommentService:
    return request.app.state.comment_service
