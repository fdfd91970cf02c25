"""Rank feed entries and keep the top of the list."""

import math

from src.core.models import FeedEntry

TOP_N = 100


def rating_of(entry: FeedEntry) -> float:
    """Numeric rating, or -inf when it is missing or not a number."""
    rating = entry.rating
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return -math.inf
    if math.isnan(rating):
        return -math.inf
    return float(rating)


def is_valid(entry: FeedEntry) -> bool:
    return bool(entry.name) and bool(entry.app_id)


def select_top(entries: list[FeedEntry], limit: int = TOP_N) -> list[FeedEntry]:
    """
    Highest rated entries first, cut at `limit`, then invalid entries removed.

    NOTE the filter runs AFTER the cut: an invalid entry inside the top `limit` takes a slot,
    and valid entries ranked below `limit` are never considered. The result can hold fewer than `limit` entries.
    """
    # sorted() is stable, also with reverse=True: equal ratings keep the feed order
    ranked = sorted(entries, key=rating_of, reverse=True)
    return [entry for entry in ranked[:limit] if is_valid(entry)]
