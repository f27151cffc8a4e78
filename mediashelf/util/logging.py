"""
Structured logging for store, lifecycle and catalog operations.
"""

import logging
from typing import Any, Dict, List


class StructuredLogger:
    """Structured logger for MediaShelf operations."""

    def __init__(self, name: str = "mediashelf"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "error"):
            self.logger.error(message)
        else:
            self.logger.info(message)

    def log_store_operation(self, operation: str, key: str, item_count: int = None, status: str = "success"):
        """Log a persistence operation against the collection key."""
        details = {"key": key}
        if item_count is not None:
            details["item_count"] = item_count

        self.log_operation(f"store.{operation}", status, details)

    def log_lifecycle_event(self, action: str, item_id: str, title: str = None,
                            review: str = None, status: str = "success"):
        """Log a create/update/delete applied to the collection."""
        details = {"item_id": item_id}
        if title is not None:
            details["title"] = title
        if review is not None:
            details["review"] = review[:50] + "..." if len(review) > 50 else review

        self.log_operation(f"lifecycle.{action}", status, details)

    def log_catalog_query(self, query: str, media_type: str, sort_mode: str, result_count: int):
        """Log a browse request at debug level."""
        self.logger.debug(
            f"Operation: catalog.browse, Status: success, Details: "
            f"{{'query': {query!r}, 'type': {media_type!r}, 'sort': {sort_mode!r}, 'result_count': {result_count}}}"
        )

    def log_validation_error(self, operation: str, errors: List[Any]):
        """Log rejected input with truncated error messages."""
        sanitized_errors = [str(error)[:100] for error in errors]
        self.log_operation(f"validation.{operation}", "rejected", {
            "errors": sanitized_errors,
            "error_count": len(sanitized_errors)
        })

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
