"""
Middleware for request context and logging
"""

from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .config import settings
from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Redact GraphQL payloads carried in the query string of the GraphQL endpoint.

    Args:
        params: Dictionary of query parameters

    Returns:
        Dictionary with GraphQL payload parameters redacted
    """
    sanitized = dict(params)
    for key in ("query", "variables", "extensions"):
        if key in sanitized:
            sanitized[key] = "[REDACTED]"
    return sanitized


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set logging context for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and set logging context."""
        request_id = set_request_context(request.headers.get(REQUEST_ID_HEADER))

        try:
            query_params = None
            if request.query_params:
                query_params = dict(request.query_params)
                if request.url.path == settings.graphql_path:
                    query_params = sanitize_query_params(query_params)

            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query_params=query_params,
                remote_addr=request.client.host if request.client else None,
            )

            response = await call_next(request)

            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
            )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        except Exception as e:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise

        finally:
            clear_request_context()
