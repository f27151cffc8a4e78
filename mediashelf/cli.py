"""
Command line interface for the media catalog.

    mediashelf add --type book --title "Dune" --rating 5 --creator "Frank Herbert"
    mediashelf list --query du --sort title
    mediashelf stats
"""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .api.schemas import MediaItemRequest
from .core.catalog import aggregate, browse, describe_empty_view
from .core.config import MEDIA_TYPES, SORT_MODES, TYPE_SELECTOR_ALL, RATING_MIN, RATING_MAX
from .core.lifecycle import ReviewLifecycleManager, CreateReview, UpdateReview, DeleteReview
from .core.schema import MediaItem
from .core.store import SQLiteStore, StoreError
from .util.logging import logger


def _add_field_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--type", required=True, choices=MEDIA_TYPES, help="Media type")
    parser.add_argument("--title", required=True, help="Title of the movie, book or podcast")
    parser.add_argument("--rating", required=True, type=int,
                        help=f"Rating from {RATING_MIN} to {RATING_MAX}")
    parser.add_argument("--creator", help="Director, author or host")
    parser.add_argument("--review", help="Free-text review")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mediashelf", description="Rate and review movies, books and podcasts")
    parser.add_argument("--db", help="Path to the SQLite database (default: $DB_PATH)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a review")
    _add_field_arguments(add_parser)

    edit_parser = subparsers.add_parser("edit", help="Replace all fields of a review")
    edit_parser.add_argument("item_id", help="Review id")
    _add_field_arguments(edit_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a review")
    delete_parser.add_argument("item_id", help="Review id")

    show_parser = subparsers.add_parser("show", help="Show a single review")
    show_parser.add_argument("item_id", help="Review id")

    list_parser = subparsers.add_parser("list", help="Browse the library")
    list_parser.add_argument("--query", default="", help="Search title or creator")
    list_parser.add_argument("--type", default=TYPE_SELECTOR_ALL,
                             choices=(TYPE_SELECTOR_ALL, *MEDIA_TYPES), help="Filter by type")
    list_parser.add_argument("--sort", default="recent", choices=SORT_MODES, help="Sort order")

    subparsers.add_parser("stats", help="Show collection statistics")
    return parser


def _format_item(item: MediaItem) -> str:
    stars = "★" * item.rating + "☆" * (RATING_MAX - item.rating)
    line = f"{item.id}  [{item.type}] {item.title}"
    if item.creator:
        line += f" - {item.creator}"
    line += f"  {stars}  ({item.date_added})"
    if item.review:
        line += f"\n    {item.review}"
    return line


def _request_from_args(args) -> Optional[MediaItemRequest]:
    try:
        return MediaItemRequest(
            type=args.type,
            title=args.title,
            rating=args.rating,
            creator=args.creator,
            review=args.review,
        )
    except ValidationError as e:
        logger.log_validation_error(args.command, e.errors())
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"❌ {field}: {error['msg']}")
        return None


def _print_stats(items: List[MediaItem]):
    stats = aggregate(items)
    print(f"Total reviews: {stats.total_reviews}")
    print(f"Average rating: {stats.average_rating:.1f}")
    for media_type, type_stats in stats.by_type.items():
        print(f"  {media_type:<8} {type_stats.count:>4} reviews, average {type_stats.average_rating:.1f}")
    if stats.recent_activity:
        print("Recent activity:")
        for item in stats.recent_activity[:5]:
            print(f"  {item.date_added}  {item.title}")


def run(args) -> int:
    store = SQLiteStore(db_path=args.db)
    manager = ReviewLifecycleManager(store)

    if args.command in ("add", "edit"):
        request = _request_from_args(args)
        if request is None:
            return 2
        if args.command == "add":
            item = manager.dispatch(CreateReview(request.to_fields()))
            print(f"✅ Added {item.title} ({item.id})")
        else:
            applied = manager.dispatch(UpdateReview(args.item_id, request.to_fields()))
            print(f"✅ Updated {args.item_id}" if applied else f"No review with id {args.item_id}")
        return 0

    if args.command == "delete":
        removed = manager.dispatch(DeleteReview(args.item_id))
        print(f"✅ Deleted {args.item_id}" if removed else f"No review with id {args.item_id}")
        return 0

    if args.command == "show":
        item = manager.get(args.item_id)
        if item is None:
            print(f"❌ No review with id {args.item_id}")
            return 1
        print(_format_item(item))
        return 0

    items = store.read()
    if args.command == "stats":
        _print_stats(items)
        return 0

    results = browse(items, query=args.query, media_type=args.type, mode=args.sort)
    if not results:
        heading, hint = describe_empty_view(args.query, args.type, len(items))
        print(heading)
        print(f"   {hint}")
        return 0
    for item in results:
        print(_format_item(item))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except StoreError as e:
        print(f"❌ Storage error: {e}")
        logger.error(f"CLI {args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
