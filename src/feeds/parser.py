"""Decode a feed document into a flat list of entries."""

import json
from typing import Any

from src.core.exceptions import FeedParseError
from src.core.models import FeedEntry

_EXHAUSTED = object()


def parse_feed(payload: bytes | str) -> list[FeedEntry]:
    """
    Decode the JSON payload and flatten it, whatever the nesting depth.
    ----
    The document is an array whose items are either objects (the entries) or arrays of the same shape.
    Entries come out in depth-first, left-to-right document order; ranking relies on that order for ties.
    """
    try:
        document = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as exc:
        raise FeedParseError(f"Feed is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        # json.loads itself recurses once per nesting level
        raise FeedParseError("Feed is nested too deeply to decode.") from exc

    if not isinstance(document, list):
        raise FeedParseError(
            f"Feed must be a JSON array, got {type(document).__name__}."
        )
    return [FeedEntry.from_dict(leaf) for leaf in _flatten(document)]


def _flatten(document: list[Any]) -> list[dict[str, Any]]:
    """Iterative depth-first walk, so flattening adds no recursion of its own."""
    leaves: list[dict[str, Any]] = []
    stack = [iter(document)]
    while stack:
        item = next(stack[-1], _EXHAUSTED)
        if item is _EXHAUSTED:
            stack.pop()
        elif isinstance(item, list):
            stack.append(iter(item))
        elif isinstance(item, dict):
            leaves.append(item)
        else:
            raise FeedParseError(f"Unexpected feed item: {item!r}")
    return leaves

