"""
Media catalog data model: persisted review records and derived statistics.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import MEDIA_TYPES


@dataclass(frozen=True)
class MediaFields:
    """Editable field set of a review; everything except id and dateAdded."""
    type: str  # movie, book, podcast
    title: str
    rating: int
    creator: Optional[str] = None
    review: Optional[str] = None


@dataclass(frozen=True)
class MediaItem:
    id: str
    type: str
    title: str
    rating: int
    date_added: str
    creator: Optional[str] = None
    review: Optional[str] = None

    @classmethod
    def from_fields(cls, item_id: str, date_added: str, fields: MediaFields) -> 'MediaItem':
        return cls(
            id=item_id,
            type=fields.type,
            title=fields.title,
            rating=fields.rating,
            date_added=date_added,
            creator=fields.creator,
            review=fields.review,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the persisted field names; absent optionals are omitted."""
        data = {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "rating": self.rating,
            "dateAdded": self.date_added,
        }
        if self.creator is not None:
            data["creator"] = self.creator
        if self.review is not None:
            data["review"] = self.review
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaItem':
        """Create an item from its persisted form.

        Raises KeyError on missing fields and ValueError on wrongly typed ones.
        """
        for name in ("id", "title", "dateAdded"):
            if not isinstance(data[name], str):
                raise ValueError(f"{name} must be a string, got {type(data[name]).__name__}")
        if data["type"] not in MEDIA_TYPES:
            raise ValueError(f"type must be one of: {list(MEDIA_TYPES)}")
        rating = data["rating"]
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValueError(f"rating must be an integer, got {type(rating).__name__}")
        for name in ("creator", "review"):
            if data.get(name) is not None and not isinstance(data[name], str):
                raise ValueError(f"{name} must be a string when present")

        return cls(
            id=data["id"],
            type=data["type"],
            title=data["title"],
            rating=data["rating"],
            date_added=data["dateAdded"],
            creator=data.get("creator"),
            review=data.get("review"),
        )


@dataclass
class TypeStats:
    count: int = 0
    average_rating: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "averageRating": self.average_rating}


@dataclass
class MediaStats:
    """Aggregate view over the whole collection. Never persisted."""
    total_reviews: int
    average_rating: float
    by_type: Dict[str, TypeStats]
    recent_activity: List[MediaItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalReviews": self.total_reviews,
            "averageRating": self.average_rating,
            "byType": {media_type: stats.to_dict() for media_type, stats in self.by_type.items()},
            "recentActivity": [item.to_dict() for item in self.recent_activity],
        }