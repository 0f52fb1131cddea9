"""
API Middleware package.

Contains middleware components for request processing:
- Wide Events: Canonical log line pattern for comprehensive request logging
"""

from writeassist.api.middleware.wide_events import (
    WideEventMiddleware,
    add_error_to_wide_event,
)

__all__ = [
    "WideEventMiddleware",
    "add_error_to_wide_event",
]
