from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from constellation.api.v1.router import v1_router
from constellation.core.config import Settings, get_settings
from constellation.core.errors import register_exception_handlers
from constellation.core.logging import configure_logging
from constellation.core.middleware import RequestIdMiddleware
from constellation.policies.comment_policy import get_reply_policy
from constellation.services.comment_service import CommentService
from constellation.services.recommender import build_recommender
from constellation.store import build_store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Middleware: Request ID
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    register_exception_handlers(app)

    app.state.settings = settings
    app.state.store = build_store(settings)
    app.state.recommender = build_recommender(settings)
    app.state.comment_service = CommentService(get_reply_policy(settings.reply_policy))

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()
