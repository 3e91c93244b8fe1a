"""
Middleware for request context and logging
"""

import re
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.types import Receive, Scope, Send

from .logging import clear_request_context, get_logger, set_request_context

logger = get_logger(__name__)

GRAPHQL_PATH = "/graphql"


def sanitize_query_params(params: dict[str, Any], path: str) -> dict[str, Any]:
    """Redact query parameters that should never reach the logs.

    GraphQL documents and variables can carry user data, so on the GraphQL
    path they are always replaced.
    """
    sensitive_keys = {"password", "token", "secret", "auth", "key", "session", "cookie"}
    graphql_keys = {"query", "variables", "extensions"}

    sanitized = {}
    for key, value in params.items():
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            sanitized[key] = "[REDACTED]"
        elif path == GRAPHQL_PATH and key in graphql_keys:
            sanitized[key] = "[REDACTED]"
        else:
            sanitized[key] = value

    return sanitized


def extract_graphql_operation_name(request: Request) -> str | None:
    """Best-effort operation name for GET /graphql, for log correlation only."""
    if request.url.path != GRAPHQL_PATH or request.method != "GET":
        return None

    params = request.query_params
    op = params.get("operationName")
    if op:
        return op

    q = params.get("query", "")
    if not q:
        return None
    if "__schema" in q or "IntrospectionQuery" in q:
        return "__introspection"

    match = re.search(r"\bquery\s+(\w+)", q) or re.search(r"\bmutation\s+(\w+)", q)
    if match:
        kind = "mutation:" if q.lstrip().startswith("mutation") else ""
        return f"{kind}{match.group(1)}"
    return "unnamed_operation"


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware to set logging context for each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and set logging context."""
        request_id = set_request_context(request.headers.get("x-request-id"))

        try:
            sanitized_params = None
            if request.query_params:
                sanitized_params = sanitize_query_params(
                    dict(request.query_params), request.url.path
                )

            graphql_operation = extract_graphql_operation_name(request)

            log_data = {
                "method": request.method,
                "path": request.url.path,
                "query_params": sanitized_params,
                "user_agent": request.headers.get("user-agent"),
                "remote_addr": request.client.host if request.client else None,
            }
            if graphql_operation:
                log_data["graphql_operation"] = graphql_operation

            logger.info("Request started", **log_data)

            response = await call_next(request)

            logger.info(
                "Request completed",
                status_code=response.status_code,
                method=request.method,
                path=request.url.path,
                graphql_operation=graphql_operation,
            )

            response.headers["X-Request-ID"] = request_id
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


class SimpleRequestCORSMiddleware(CORSMiddleware):
    """CORS headers for simple GET requests.

    Preflight ``OPTIONS`` requests to the GraphQL path are passed on to the
    route, which answers them like any other non-GET request.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        is_preflight_target = (
            scope["type"] == "http" and scope["method"] == "OPTIONS" and scope["path"] == GRAPHQL_PATH
        )
        if is_preflight_target:
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
