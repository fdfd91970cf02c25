"""
Boundary layer data model(s).

These objects are used to communicate with the Services.
Both the API layer (higher) and the db/feeds layers (lower) send to / receive from the Services using the models defined here,
which decouples the ORM rows and the request/response schemas from the information that crosses the boundaries.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.core.shared_types import ErrorKind, Platform


@dataclass
class GameModel:
    """Transport-safe representation of a catalog game used between API, Service and DB layers."""

    publisher_id: str
    name: str
    platform: Platform
    store_id: str
    bundle_id: Optional[str] = None
    app_version: Optional[str] = None
    is_published: bool = False


@dataclass(frozen=True)
class FeedSource:
    """Remote top-100 ranking for one platform."""

    url: str
    platform: Platform

    @classmethod
    def from_url(cls, url: str) -> "FeedSource":
        """The platform is a property of the URL, not of the feed content."""
        platform = Platform.ANDROID if "android" in url else Platform.IOS
        return cls(url=url, platform=platform)


@dataclass
class FeedEntry:
    """One leaf object of a feed document. Nothing is validated at this point."""

    name: Any = None
    app_id: Any = None
    os: Any = None
    bundle_id: Any = None
    version: Any = None
    publisher_id: Any = None
    rating: Any = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "FeedEntry":
        return cls(
            name=raw.get("name"),
            app_id=raw.get("app_id"),
            os=raw.get("os"),
            bundle_id=raw.get("bundle_id"),
            version=raw.get("version"),
            publisher_id=raw.get("publisher_id"),
            rating=raw.get("rating"),
        )


@dataclass
class IngestionOutcome:
    """Result of ingesting a single feed source: either an inserted count, or an error."""

    platform: Platform
    inserted_count: int = 0
    error_message: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error_message is None


@dataclass
class Failure:
    kind: ErrorKind
    message: str


@dataclass
class PopulateReport:
    """Outcome of a whole populate run."""

    outcomes: list[IngestionOutcome] = field(default_factory=list)
    failure: Optional[Failure] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @property
    def failed_platforms(self) -> list[Platform]:
        return [outcome.platform for outcome in self.outcomes if not outcome.ok]

    @property
    def inserted_count(self) -> int:
        return sum(outcome.inserted_count for outcome in self.outcomes)
