"""
Catalog engine - pure views over a collection snapshot: filtering, sorting
and aggregate statistics. Nothing here touches the store.
"""

import unicodedata
from datetime import datetime, timezone
from typing import Dict, List, Sequence, Tuple

from .config import MEDIA_TYPES, SORT_MODES, TYPE_SELECTOR_ALL
from .schema import MediaItem, MediaStats, TypeStats

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _parse_date(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; unparseable values sort as the oldest."""
    try:
        # fromisoformat only accepts a trailing 'Z' from Python 3.11
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _collation_key(title: str) -> Tuple[str, str]:
    normalized = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return (base.casefold(), title)


def _check_selector(media_type: str):
    if media_type != TYPE_SELECTOR_ALL and media_type not in MEDIA_TYPES:
        raise ValueError(f"type must be one of: {[TYPE_SELECTOR_ALL, *MEDIA_TYPES]}")


def matches_query(item: MediaItem, query: str) -> bool:
    """Case-insensitive substring match on title or, when present, creator."""
    if not query:
        return True
    needle = query.lower()
    if needle in item.title.lower():
        return True
    return item.creator is not None and needle in item.creator.lower()


def filter_items(items: Sequence[MediaItem], query: str = "", media_type: str = TYPE_SELECTOR_ALL) -> List[MediaItem]:
    """Keep items matching the search query and the type selector."""
    _check_selector(media_type)
    return [
        item for item in items
        if matches_query(item, query)
        and (media_type == TYPE_SELECTOR_ALL or item.type == media_type)
    ]


def sort_by_recency(items: Sequence[MediaItem]) -> List[MediaItem]:
    return sorted(items, key=lambda item: _parse_date(item.date_added), reverse=True)


def sort_items(items: Sequence[MediaItem], mode: str = "recent") -> List[MediaItem]:
    """Return a new list ordered by ``mode``; the input is left untouched.

    ``recent`` and ``rating`` are descending, ``title`` ascending. All three
    are stable, so ties keep their relative order.
    """
    if mode == "recent":
        return sort_by_recency(items)
    if mode == "rating":
        return sorted(items, key=lambda item: item.rating, reverse=True)
    if mode == "title":
        return sorted(items, key=lambda item: _collation_key(item.title))
    raise ValueError(f"sort mode must be one of: {list(SORT_MODES)}")


def browse(items: Sequence[MediaItem], query: str = "", media_type: str = TYPE_SELECTOR_ALL,
           mode: str = "recent") -> List[MediaItem]:
    """Library view: filter, then sort."""
    return sort_items(filter_items(items, query, media_type), mode)


def _average(ratings: List[int]) -> float:
    return sum(ratings) / len(ratings) if ratings else 0


def aggregate(items: Sequence[MediaItem]) -> MediaStats:
    """Compute MediaStats over the full collection. Empty buckets average to 0."""
    by_type: Dict[str, TypeStats] = {}
    for media_type in MEDIA_TYPES:
        ratings = [item.rating for item in items if item.type == media_type]
        by_type[media_type] = TypeStats(count=len(ratings), average_rating=_average(ratings))

    return MediaStats(
        total_reviews=len(items),
        average_rating=_average([item.rating for item in items]),
        by_type=by_type,
        recent_activity=sort_by_recency(items),
    )


def describe_empty_view(query: str, media_type: str, total: int) -> Tuple[str, str]:
    """Heading and hint for a library view with no results."""
    if query:
        return "No results found", "Try adjusting your search or filters"
    if total == 0:
        return "No reviews yet", "Start by adding your first review"
    return f"No {media_type} reviews", "Start by adding your first review"
