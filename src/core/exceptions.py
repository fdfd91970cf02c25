"""Exceptions raised across layers. Each one carries the ErrorKind the API dispatcher maps to a status code."""

from src.core.shared_types import ErrorKind


class CatalogError(Exception):
    """Base class for every error raised on purpose by this service."""

    kind: ErrorKind = ErrorKind.UNEXPECTED


# --- Caller input ---
class InvalidRequestError(CatalogError):
    kind = ErrorKind.VALIDATION


class GameNotFoundError(InvalidRequestError):
    pass


# --- Persistence ---
class RepositoryError(CatalogError):
    kind = ErrorKind.SOURCE_LOCAL


# --- Feed ingestion (scoped to a single source) ---
class FeedError(CatalogError):
    kind = ErrorKind.SOURCE_LOCAL


class FeedFetchError(FeedError):
    pass


class FeedParseError(FeedError):
    pass


# --- Populate run as a whole ---
class PopulateError(CatalogError):
    kind = ErrorKind.PIPELINE_FATAL

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.PIPELINE_FATAL) -> None:
        super().__init__(message)
        self.kind = kind
