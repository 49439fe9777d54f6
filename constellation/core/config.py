from functools import lru_cache
from typing import List, Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Constellation Community Actions"
    environment: str = "dev"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"

    # ─────────── STORAGE ───────────
    storage_backend: Literal["json", "sql"] = "json"
    data_file: str = "data/store.json"
    database_url: str = "sqlite:///data/store.db"
    seed_on_empty: bool = True

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 60 * 24 * 7  # 7 days, no refresh

    # ─────────── COMMENTS ───────────
    # "owner": only the action owner (or an admin) may reply
    # "any": every authenticated user may reply
    reply_policy: Literal["owner", "any"] = "owner"

    # ─────────── RECOMMENDER ───────────
    recommender_api_key: Optional[str] = None
    recommender_base_url: str = "https://api.openai.com/v1"
    recommender_model: str = "gpt-4o-mini"
    recommender_timeout_seconds: float = 5.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
