"""
Recipe Service Middleware
Request logging middleware and logging helpers
"""

from .logging import LoggingMiddleware, get_request_id, log_business_event

__all__ = [
    "LoggingMiddleware",
    "get_request_id",
    "log_business_event"
]
