"""
Repopulation of the catalog from the remote ranking feeds.

Clear the store once, then run one independent pipeline per feed source, concurrently:
    fetch -> parse -> rank/select -> map to GameModel -> sanitize -> bulk insert
A failing source is recorded in the report and never stops its siblings.
The only fatal failure is a store that cannot be cleared.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Iterable, Protocol, TypeVar

from src.core.exceptions import CatalogError
from src.core.models import (
    Failure,
    FeedEntry,
    FeedSource,
    GameModel,
    IngestionOutcome,
    PopulateReport,
)
from src.core.shared_types import ErrorKind, Platform
from src.db.repository import GameRepository
from src.feeds.parser import parse_feed
from src.feeds.ranking import TOP_N, select_top
from src.feeds.sanitizer import sanitize

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Fetcher(Protocol):
    def fetch(self, url: str) -> bytes: ...


def settle(tasks: Iterable[Future[T]]) -> list[T | BaseException]:
    """Wait for every task, whatever its outcome. Each task yields its result or the exception it raised."""
    tasks = list(tasks)
    wait(tasks)
    return [task.exception() or task.result() for task in tasks]


class PopulateService:
    """Orchestration of a populate run (the repopulation coordinator)."""

    def __init__(
        self,
        repository: GameRepository,
        fetcher: Fetcher,
        sources: list[FeedSource],
        top_n: int = TOP_N,
    ) -> None:
        self.repo = repository
        self.fetcher = fetcher
        self.sources = sources
        self.top_n = top_n

    def populate(self) -> PopulateReport:
        """Replace the whole catalog with the current top of every feed."""

        # Clearing: must be done (and committed) before anything gets inserted
        try:
            removed = self.repo.clear_all()
        except CatalogError as exc:
            logger.error("Populate aborted, could not clear the catalog: %s", exc)
            return PopulateReport(
                failure=Failure(kind=ErrorKind.PIPELINE_FATAL, message=str(exc))
            )
        except Exception as exc:
            logger.exception("Populate aborted, unexpected failure clearing the catalog")
            return PopulateReport(
                failure=Failure(kind=ErrorKind.UNEXPECTED, message=str(exc))
            )
        logger.info("Cleared %d games from the catalog", removed)

        # Ingesting: one task per source
        outcomes = self._ingest_all()

        # Completed
        report = PopulateReport(outcomes=outcomes)
        logger.info(
            "Populate completed: %d games inserted, failed sources: %s",
            report.inserted_count,
            [str(platform) for platform in report.failed_platforms] or "none",
        )
        return report

    def _ingest_all(self) -> list[IngestionOutcome]:
        if not self.sources:
            return []
        with ThreadPoolExecutor(max_workers=len(self.sources)) as pool:
            tasks = [pool.submit(self._ingest, source) for source in self.sources]
            results = settle(tasks)
        return [
            self._to_outcome(source, result)
            for source, result in zip(self.sources, results)
        ]

    def _ingest(self, source: FeedSource) -> int:
        """Full pipeline for one source. Returns the number of inserted games."""
        payload = self.fetcher.fetch(source.url)
        entries = parse_feed(payload)
        selected = select_top(entries, self.top_n)
        games = [to_game_model(entry, source.platform) for entry in selected]
        # Sanitizing can empty a field that was not empty before
        games = [game for game in games if game.name and game.store_id]
        return self.repo.bulk_insert(games)

    def _to_outcome(
        self, source: FeedSource, result: int | BaseException
    ) -> IngestionOutcome:
        if not isinstance(result, BaseException):
            logger.info("Inserted %d %s games", result, source.platform)
            return IngestionOutcome(platform=source.platform, inserted_count=result)

        if isinstance(result, CatalogError):
            logger.warning("Skipping %s feed %s: %s", source.platform, source.url, result)
            kind = ErrorKind.SOURCE_LOCAL
        else:
            logger.error(
                "Unexpected failure ingesting %s feed %s",
                source.platform,
                source.url,
                exc_info=result,
            )
            kind = ErrorKind.UNEXPECTED
        return IngestionOutcome(
            platform=source.platform,
            error_message=str(result) or type(result).__name__,
            error_kind=kind,
        )


def to_game_model(entry: FeedEntry, fallback_platform: Platform) -> GameModel:
    """Map a feed entry to a storable game, every text field sanitized."""
    platform = fallback_platform
    if isinstance(entry.os, str) and entry.os in Platform:
        platform = Platform(entry.os)
    return GameModel(
        publisher_id=_clean(entry.publisher_id) or "",
        name=_clean(entry.name) or "",
        platform=platform,
        store_id=_clean(entry.app_id) or "",
        bundle_id=_clean(entry.bundle_id),
        app_version=_clean(entry.version),
        is_published=True,
    )


def _clean(value: object) -> str | None:
    if value is None:
        return None
    return sanitize(str(value))
