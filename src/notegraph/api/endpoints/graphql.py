"""
GraphQL over HTTP GET
"""

import asyncio
import json

from fastapi import APIRouter, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...config import Settings
from ...graphql.schema import execute, result_envelope
from ...logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

GRAPHQL_PATH = "/graphql"
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def respond_not_found() -> Response:
    return PlainTextResponse("Not Found", status_code=404)


def respond_bad_request() -> Response:
    return PlainTextResponse("Bad Request", status_code=400)


def respond_server_error() -> Response:
    return PlainTextResponse("Server Error", status_code=500)


def parse_variables(raw: str | None) -> dict | None:
    """Decode the ``variables`` URL parameter; raises ValueError if it is not a JSON object."""
    if not raw:
        return None
    variables = json.loads(raw)
    if not isinstance(variables, dict):
        raise ValueError("variables must be a JSON object")
    return variables


@router.api_route(GRAPHQL_PATH, methods=ROUTE_METHODS)
async def graphql_endpoint(request: Request) -> Response:
    """
    GraphQL endpoint.

    - Answers anything but GET with 404.
    - Reads the document from ``?query=`` (plus optional ``operationName``
      and ``variables``).
    - Runs it as a query operation, bounded by the configured timeout.
    - Maps execution errors to 500; the detail only goes to the log.
    """
    if request.method != "GET":
        logger.info("Rejected GraphQL request method", method=request.method)
        return respond_not_found()

    params = request.query_params
    query = params.get("query", "")
    operation_name = params.get("operationName") or None

    try:
        variables = parse_variables(params.get("variables"))
    except ValueError as e:
        logger.warning("Invalid GraphQL variables", error=str(e))
        return respond_bad_request()

    settings: Settings = request.app.state.settings
    try:
        result = await asyncio.wait_for(
            execute(
                request.app.state.store,
                query,
                variables=variables,
                operation_name=operation_name,
                request=request,
                allow_mutations=False,
            ),
            timeout=settings.query_timeout,
        )
    except asyncio.TimeoutError:
        logger.error("GraphQL execution timed out", timeout=settings.query_timeout)
        return respond_server_error()

    if result.errors:
        logger.error(
            "GraphQL execution failed",
            errors=[error.message for error in result.errors],
            operation_name=operation_name,
        )
        return respond_server_error()

    try:
        body = json.dumps(result_envelope(result), indent="\t", ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize GraphQL response", error=str(e))
        return respond_server_error()

    return Response(content=body, media_type="application/json")


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Answer 404 for verbs the /graphql route does not list; other paths keep their 405."""
    if request.url.path == GRAPHQL_PATH:
        logger.info("Rejected GraphQL request method", method=request.method)
        return respond_not_found()
    return await http_exception_handler(request, exc)
