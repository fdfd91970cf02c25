"""Everything the services need, built once when the app starts."""

from dataclasses import dataclass, field

import httpx
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.core.models import FeedSource
from src.db.database import build_session_factory
from src.feeds.fetcher import FeedFetcher


@dataclass
class ServiceContext:
    session_factory: sessionmaker[Session]
    http_client: httpx.Client
    sources: list[FeedSource] = field(default_factory=list)
    feed_timeout_seconds: float = 30.0
    top_n: int = 100

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        return cls(
            session_factory=build_session_factory(
                settings.database_url, echo=settings.sql_echo
            ),
            http_client=httpx.Client(follow_redirects=True),
            sources=[FeedSource.from_url(url) for url in settings.feed_urls],
            feed_timeout_seconds=settings.feed_timeout_seconds,
            top_n=settings.feed_top_n,
        )

    def fetcher(self) -> FeedFetcher:
        return FeedFetcher(self.http_client, timeout=self.feed_timeout_seconds)

    def close(self) -> None:
        self.http_client.close()
