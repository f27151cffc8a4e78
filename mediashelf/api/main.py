"""
HTTP API for the media catalog: review CRUD, library browsing and statistics.
"""

from functools import lru_cache

from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from typing import Literal

from .schemas import (
    MediaItemRequest,
    MediaItemResponse,
    MediaListResponse,
    MutationResponse,
    MediaStatsResponse,
    HealthResponse,
    ErrorResponse,
)
from ..core.catalog import browse, aggregate
from ..core.config import VERSION, debug_enabled
from ..core.db import health_check
from ..core.lifecycle import ReviewLifecycleManager
from ..core.store import Store, SQLiteStore, StoreError
from ..util.logging import logger

# Initialize the FastAPI application
app = FastAPI(
    title="MediaShelf API",
    version=VERSION,
    description="Personal catalog of rated and reviewed movies, books and podcasts",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

# Add CORS middleware to allow frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_store() -> Store:
    """Process-wide store; one instance so every request shares its lock."""
    return SQLiteStore()


def get_manager(store: Store = Depends(get_store)) -> ReviewLifecycleManager:
    return ReviewLifecycleManager(store)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    body = ErrorResponse(error_type="STORAGE_ERROR", message=str(exc))
    return JSONResponse(status_code=503, content=body.model_dump(mode="json"))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.log_validation_error(f"{request.method} {request.url.path}", exc.errors())
    return await request_validation_exception_handler(request, exc)


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(store: Store = Depends(get_store)):
    """Check system health."""
    db_health = health_check(store.db_path) if isinstance(store, SQLiteStore) else True
    try:
        review_count = len(store.read())
    except StoreError:
        db_health = False
        review_count = 0

    return HealthResponse(
        status="healthy" if db_health else "unhealthy",
        version=VERSION,
        db_health=db_health,
        review_count=review_count
    )


@app.get("/media", response_model=MediaListResponse)
def list_media_endpoint(
    query: str = "",
    type: Literal['all', 'movie', 'book', 'podcast'] = "all",
    sort: Literal['recent', 'rating', 'title'] = "recent",
    store: Store = Depends(get_store),
):
    """Library view: search by title or creator, filter by type, sort."""
    items = browse(store.read(), query=query, media_type=type, mode=sort)
    logger.log_catalog_query(query, type, sort, len(items))
    return MediaListResponse(
        items=[MediaItemResponse.from_item(item) for item in items],
        total=len(items)
    )


@app.get("/media/{item_id}", response_model=MediaItemResponse)
def get_media_endpoint(item_id: str, manager: ReviewLifecycleManager = Depends(get_manager)):
    item = manager.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Review not found")
    return MediaItemResponse.from_item(item)


@app.post("/media", response_model=MediaItemResponse, status_code=201)
def create_media_endpoint(request: MediaItemRequest, manager: ReviewLifecycleManager = Depends(get_manager)):
    item = manager.create(request.to_fields())
    return MediaItemResponse.from_item(item)


@app.put("/media/{item_id}", response_model=MutationResponse)
def update_media_endpoint(item_id: str, request: MediaItemRequest,
                          manager: ReviewLifecycleManager = Depends(get_manager)):
    """Replace every editable field; an unknown id is accepted and changes nothing."""
    applied = manager.update(item_id, request.to_fields())
    return MutationResponse(success=True, id=item_id, applied=applied)


@app.delete("/media/{item_id}", response_model=MutationResponse)
def delete_media_endpoint(item_id: str, manager: ReviewLifecycleManager = Depends(get_manager)):
    applied = manager.delete(item_id)
    return MutationResponse(success=True, id=item_id, applied=applied)


@app.get("/stats", response_model=MediaStatsResponse)
def stats_endpoint(store: Store = Depends(get_store)):
    return MediaStatsResponse.from_stats(aggregate(store.read()))
