"""
Request/response models for the media catalog API.

Request models are the validation boundary: the lifecycle manager trusts
whatever passes through them.
"""

from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

from ..core.config import RATING_MIN, RATING_MAX
from ..core.schema import MediaFields, MediaItem, MediaStats

MediaType = Literal['movie', 'book', 'podcast']


class MediaItemRequest(BaseModel):
    type: MediaType
    title: str
    rating: int
    creator: Optional[str] = None
    review: Optional[str] = None

    @field_validator('title')
    @classmethod
    def title_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('title cannot be empty')
        return v.strip()

    @field_validator('rating')
    @classmethod
    def rating_must_be_in_range(cls, v):
        if not RATING_MIN <= v <= RATING_MAX:
            raise ValueError(f'rating must be between {RATING_MIN} and {RATING_MAX}')
        return v

    @field_validator('creator', 'review')
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def to_fields(self) -> MediaFields:
        return MediaFields(
            type=self.type,
            title=self.title,
            rating=self.rating,
            creator=self.creator,
            review=self.review,
        )


class MediaItemResponse(BaseModel):
    id: str
    type: MediaType
    title: str
    rating: int
    dateAdded: str
    creator: Optional[str] = None
    review: Optional[str] = None

    @classmethod
    def from_item(cls, item: MediaItem) -> 'MediaItemResponse':
        return cls(**item.to_dict())


class MediaListResponse(BaseModel):
    items: List[MediaItemResponse]
    total: int


class MutationResponse(BaseModel):
    success: bool
    id: str
    applied: bool


class TypeStatsResponse(BaseModel):
    count: int
    averageRating: float


class MediaStatsResponse(BaseModel):
    totalReviews: int
    averageRating: float
    byType: Dict[str, TypeStatsResponse]
    recentActivity: List[MediaItemResponse]

    @classmethod
    def from_stats(cls, stats: MediaStats) -> 'MediaStatsResponse':
        return cls(**stats.to_dict())


class HealthResponse(BaseModel):
    status: str
    version: str
    db_health: bool
    review_count: int


class ErrorResponse(BaseModel):
    error_type: str
    message: str
    timestamp: datetime = None
    details: Optional[Dict[str, Any]] = None

    def __init__(self, **data):
        super().__init__(timestamp=datetime.now(), **data)
