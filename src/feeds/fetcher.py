"""Download a feed document."""

import logging

import httpx

from src.core.exceptions import FeedFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class FeedFetcher:
    """Reads a remote feed to completion. The whole body is kept in memory (feeds are top-100 lists)."""

    def __init__(
        self, client: httpx.Client, timeout: float = DEFAULT_TIMEOUT_SECONDS
    ) -> None:
        self.client = client
        self.timeout = httpx.Timeout(timeout)

    def fetch(self, url: str) -> bytes:
        """Stream the body of `url` into a buffer. Raises FeedFetchError on transport errors or a non-success status."""
        buffer = bytearray()
        try:
            with self.client.stream("GET", url, timeout=self.timeout) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    buffer.extend(chunk)
        except httpx.HTTPStatusError as exc:
            raise FeedFetchError(
                f"Feed {url} answered with status {exc.response.status_code}."
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FeedFetchError(f"Could not download feed {url}: {exc!r}") from exc

        logger.debug("Fetched %d bytes from %s", len(buffer), url)
        return bytes(buffer)
