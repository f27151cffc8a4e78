# Package initialization for the catalog core
from .schema import MediaFields, MediaItem, MediaStats, TypeStats
from .store import Store, InMemoryStore, SQLiteStore, StoreError
from .catalog import filter_items, sort_items, aggregate, browse, describe_empty_view
from .lifecycle import ReviewLifecycleManager, CreateReview, UpdateReview, DeleteReview

__all__ = [
    'MediaFields',
    'MediaItem',
    'MediaStats',
    'TypeStats',
    'Store',
    'InMemoryStore',
    'SQLiteStore',
    'StoreError',
    'filter_items',
    'sort_items',
    'aggregate',
    'browse',
    'describe_empty_view',
    'ReviewLifecycleManager',
    'CreateReview',
    'UpdateReview',
    'DeleteReview',
]
