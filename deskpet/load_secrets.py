import logging
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./deskpet.sqlite3"
DEFAULT_SECRET = "defaultsecret"


@dataclass(frozen=True)
class ServerConfig:
    """Settings handed to the application factory.

    Services only ever see this object, never the process environment.
    """
    database_url: str = DEFAULT_DATABASE_URL
    secret: str = DEFAULT_SECRET
    pepper_data: str = ""
    token_expire_minutes: int = 60
    reward_tier_count: int = 10
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"


def load_config() -> ServerConfig:
    """Read the server settings from the environment (and .env if present)."""
    load_dotenv()

    secret = os.getenv("SECRET", DEFAULT_SECRET)
    if secret == DEFAULT_SECRET:
        logging.warning("SECRET is not set, falling back to the default signing secret")

    cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")

    return ServerConfig(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        secret=secret,
        pepper_data=os.getenv("PEPPER_DATA", ""),
        token_expire_minutes=int(os.getenv("TOKEN_EXPIRE_MINUTES", "60")),
        reward_tier_count=int(os.getenv("REWARD_TIER_COUNT", "10")),
        cors_origins=[origin.strip() for origin in cors_origins if origin.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


if __name__ == "__main__":
    config = load_config()
    print(config.database_url, config.token_expire_minutes, config.reward_tier_count)
