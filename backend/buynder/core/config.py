"""
Runtime settings for the Buynder service.

WHAT: Every tunable (pacing, phrasing, limits, CORS, logging) in one object
WHY: Tests and deployments override values through env vars or a .env file
HOW: pydantic-settings BaseSettings, instantiated once as ``settings``
"""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings read from the environment, then .env, then these defaults."""

    APP_NAME: str = "Buynder Marketplace Assistant"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Pacing for a conversation turn, in seconds. The engine answers
    # instantly; these make the simulated seller feel like a person.
    SELLER_REPLY_DELAY_SECONDS: float = 1.5
    BUYER_HELPER_DELAY_SECONDS: float = 1.0

    # How the seller picks among reply variants
    PHRASE_SELECTION: Literal["random", "round_robin"] = "random"
    PHRASE_SEED: int | None = None

    MAX_MESSAGE_LENGTH: int = 1000

    # Comma-separated; a JSON list is also accepted
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "./data/logs/buynder.log"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def join_cors_origins(cls, v):
        """Store list input in the same comma-separated form as env input."""
        if isinstance(v, (list, tuple)):
            return ",".join(v)
        return v

    def get_cors_origins_list(self) -> list[str]:
        """CORS origins split into a list, blanks dropped."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        # Repository root .env, then backend/.env
        env_file = [
            str(Path(__file__).parent.parent.parent.parent / ".env"),
            str(Path(__file__).parent.parent.parent / ".env"),
        ]
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
