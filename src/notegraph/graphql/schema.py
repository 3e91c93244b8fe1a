"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import GraphQLError, OperationType, get_operation_ast, parse
from graphql import validate_schema as gql_validate_schema
from strawberry.types import ExecutionResult

from ..logging import get_logger
from ..store.base import NoteStore
from .context import build_context
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    This ensures that all type references can be resolved, causing the
    server to fail fast rather than erroring on the first request.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Check that introspection query works (catches most resolution issues)
        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())

        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def print_schema() -> str:
    """Return the schema in SDL form."""
    return schema.as_str()


async def execute(
    store: NoteStore,
    query: str,
    *,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
    request: Any = None,
    allow_mutations: bool = True,
) -> ExecutionResult:
    """Execute a query document against ``store``.

    With ``allow_mutations=False`` only query operations run; a mutation
    comes back as an error result without any resolver being called.
    """
    if not query:
        return ExecutionResult(data=None, errors=[GraphQLError("Must provide an operation")])

    if not allow_mutations:
        operation_type = get_operation_type(query, operation_name)
        if operation_type is not None and operation_type != OperationType.QUERY:
            logger.warning("Rejected non-query operation", operation_type=operation_type.value)
            return ExecutionResult(
                data=None,
                errors=[GraphQLError(f"{operation_type.value} operations are not allowed")],
            )

    return await schema.execute(
        query,
        variable_values=variables,
        context_value=build_context(store, request),
        operation_name=operation_name,
    )


def get_operation_type(query: str, operation_name: str | None = None) -> OperationType | None:
    """Return the type of the operation that would run, or None if the document cannot tell."""
    try:
        document = parse(query)
    except GraphQLError:
        # Let the executor report the syntax error
        return None

    operation = get_operation_ast(document, operation_name)
    return operation.operation if operation else None


def result_envelope(result: ExecutionResult) -> dict[str, Any]:
    """Shape an execution result as the JSON response envelope."""
    envelope: dict[str, Any] = {"data": result.data}
    if result.errors:
        envelope["errors"] = [error.formatted for error in result.errors]
    return envelope
