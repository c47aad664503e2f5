"""Pydantic Settings — loads configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    cw_key: str
    cw_room_id: str
    cw_user_id: str
    spreadsheet_id: str

    credentials_path: str = "credentials.json"
    worksheet_id: int = 0

    cw_api_url: str = "https://api.chatwork.com/v2"
    cw_request_timeout: float = 30.0
    self_unread: bool = True
    notify_failures: bool = True

    audit_url: str = "https://web.dev/measure/"
    audit_timeout_ms: int = 180_000
    headless: bool = True

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
