"""
Configuration loader.
Reads settings from the environment (or a .env file) and hands them to the app factory.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_FEED_URLS = (
    "https://interview-marketing-eng-dev.s3.eu-west-1.amazonaws.com/android.top100.json",
    "https://interview-marketing-eng-dev.s3.eu-west-1.amazonaws.com/ios.top100.json",
)


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./games.db"
    sql_echo: bool = False
    feed_urls: tuple[str, ...] = DEFAULT_FEED_URLS
    feed_timeout_seconds: float = 30.0
    feed_top_n: int = 100
    log_level: str = "INFO"


def _split_urls(value: str | None) -> tuple[str, ...]:
    if not value:
        return DEFAULT_FEED_URLS
    return tuple(url.strip() for url in value.split(",") if url.strip())


def load_settings() -> Settings:
    """Build Settings from environment variables, falling back to the defaults."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        sql_echo=os.getenv("SQL_ECHO", "False").lower() == "true",
        feed_urls=_split_urls(os.getenv("FEED_URLS")),
        feed_timeout_seconds=float(os.getenv("FEED_TIMEOUT_SECONDS", "30")),
        feed_top_n=int(os.getenv("FEED_TOP_N", "100")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
