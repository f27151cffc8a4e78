"""
Review lifecycle - applies create/update/delete intents to the store.

Every mutation is a pure transform over the collection, run through
``Store.update`` so it always sees the freshest persisted value.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence, Union

from .schema import MediaFields, MediaItem
from .store import Store, StoreError
from ..util.logging import logger


def append_item(items: Sequence[MediaItem], item: MediaItem) -> List[MediaItem]:
    return [*items, item]


def replace_item(items: Sequence[MediaItem], item_id: str, fields: MediaFields) -> List[MediaItem]:
    """Replace every editable field of ``item_id`` in place; unknown ids change nothing."""
    return [
        MediaItem.from_fields(item.id, item.date_added, fields) if item.id == item_id else item
        for item in items
    ]


def remove_item(items: Sequence[MediaItem], item_id: str) -> List[MediaItem]:
    return [item for item in items if item.id != item_id]


def default_id_factory() -> str:
    return str(uuid.uuid4())


def default_clock() -> str:
    """UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LoggingNotifier:
    """Default notification collaborator; reports outcomes through the logger."""

    def success(self, message: str) -> None:
        logger.info(message)

    def failure(self, message: str) -> None:
        logger.error(message)


@dataclass(frozen=True)
class CreateReview:
    fields: MediaFields


@dataclass(frozen=True)
class UpdateReview:
    item_id: str
    fields: MediaFields


@dataclass(frozen=True)
class DeleteReview:
    item_id: str


Command = Union[CreateReview, UpdateReview, DeleteReview]


class ReviewLifecycleManager:
    """
    Applies review commands to a Store.

    Input fields are trusted: title and rating are validated by the caller
    (API request models, CLI argument parsing) before reaching here.
    Update and delete on an unknown id are silent no-ops.
    """

    def __init__(self, store: Store,
                 id_factory: Callable[[], str] = default_id_factory,
                 clock: Callable[[], str] = default_clock,
                 notifier=None):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock
        self.notifier = notifier or LoggingNotifier()

    def create(self, fields: MediaFields) -> MediaItem:
        """Append a new review with a fresh id and the current timestamp."""
        item = MediaItem.from_fields(self.id_factory(), self.clock(), fields)
        try:
            self.store.update(lambda items: append_item(items, item))
        except StoreError:
            self.notifier.failure("Failed to add review")
            raise

        logger.log_lifecycle_event("create", item.id, title=item.title, review=item.review)
        self.notifier.success("Review added successfully!")
        return item

    def update(self, item_id: str, fields: MediaFields) -> bool:
        """Replace all editable fields of ``item_id``. Returns whether it existed."""
        found = False

        def transform(items: List[MediaItem]) -> List[MediaItem]:
            nonlocal found
            found = any(item.id == item_id for item in items)
            return replace_item(items, item_id, fields)

        try:
            self.store.update(transform)
        except StoreError:
            self.notifier.failure("Failed to update review")
            raise

        if found:
            logger.log_lifecycle_event("update", item_id, title=fields.title, review=fields.review)
        else:
            logger.debug(f"Update skipped, no review with id {item_id}")
        self.notifier.success("Review updated successfully!")
        return found

    def delete(self, item_id: str) -> bool:
        """Remove ``item_id`` from the collection. Returns whether it existed."""
        removed = False

        def transform(items: List[MediaItem]) -> List[MediaItem]:
            nonlocal removed
            remaining = remove_item(items, item_id)
            removed = len(remaining) != len(items)
            return remaining

        try:
            self.store.update(transform)
        except StoreError:
            self.notifier.failure("Failed to delete review")
            raise

        if removed:
            logger.log_lifecycle_event("delete", item_id)
        else:
            logger.debug(f"Delete skipped, no review with id {item_id}")
        self.notifier.success("Review deleted successfully!")
        return removed

    def get(self, item_id: str) -> Optional[MediaItem]:
        for item in self.store.read():
            if item.id == item_id:
                return item
        return None

    def dispatch(self, command: Command) -> Union[MediaItem, bool]:
        """Apply a command object; returns what the matching operation returns."""
        if isinstance(command, CreateReview):
            return self.create(command.fields)
        if isinstance(command, UpdateReview):
            return self.update(command.item_id, command.fields)
        if isinstance(command, DeleteReview):
            return self.delete(command.item_id)
        raise TypeError(f"Unsupported command: {type(command).__name__}")
