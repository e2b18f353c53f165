"""
Recipe Service Logging Middleware
Structured logging with request/response tracking and timing
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any, Optional
from contextvars import ContextVar

logger = structlog.get_logger()

# Context variable for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging middleware that provides:
    - Request/response logging with unique IDs
    - Response timing headers
    - Error tracking
    """

    def __init__(self, app, exclude_paths: Optional[set] = None):
        super().__init__(app)

        # Paths to exclude from detailed logging
        self.exclude_paths = exclude_paths or {"/health", "/favicon.ico"}

        # Sensitive headers to mask in logs
        self.sensitive_headers = {
            "authorization", "cookie", "x-api-key", "x-auth-token"
        }

    async def dispatch(self, request: Request, call_next):
        """Process request with request-scoped logging context"""
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            if any(request.url.path.startswith(path) for path in self.exclude_paths):
                response = await call_next(request)
                self._add_headers(response, request_id, time.time() - start_time)
                return response

            request_info = self._extract_request_info(request)

            logger.info(
                "Request started",
                **request_info,
                event_type="request_start"
            )

            response = await call_next(request)

            process_time = time.time() - start_time
            log_level = self._determine_log_level(response.status_code)
            logger.log(
                log_level,
                "Request completed",
                **request_info,
                status_code=response.status_code,
                process_time=round(process_time, 4),
                event_type="request_complete"
            )

            self._add_headers(response, request_id, process_time)
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                client_ip=self._get_client_ip(request),
                process_time=round(time.time() - start_time, 4),
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()

    def _extract_request_info(self, request: Request) -> Dict[str, Any]:
        """Extract request information for logging"""
        return {
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent", ""),
            "content_type": request.headers.get("content-type", ""),
            "headers": self._filter_headers(dict(request.headers)),
        }

    @staticmethod
    def _add_headers(response: Response, request_id: str, process_time: float) -> None:
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address"""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded

        return request.client.host if request.client else "unknown"

    def _filter_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Filter sensitive headers from logs"""
        filtered = {}
        for key, value in headers.items():
            if key.lower() in self.sensitive_headers:
                filtered[key] = "***MASKED***"
            else:
                filtered[key] = value
        return filtered

    def _determine_log_level(self, status_code: int) -> int:
        """Determine appropriate log level based on status code"""
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        return 20  # INFO


def get_request_id() -> str:
    """Get current request ID from context"""
    return request_id_var.get()


def log_business_event(event: str, data: Dict[str, Any] = None):
    """Log business events for analytics"""
    logger.info(
        "Business event",
        request_id=get_request_id(),
        business_event=event,
        data=data or {},
        event_type="business_event"
    )
