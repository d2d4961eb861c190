"""
Query execution against the user schema.

``execute_query`` is the single entry point of the resolution pipeline. It
parses the document, checks that it names exactly one operation to run,
validates it, runs the resolvers against a user store and reports the
result as a value: ``QuerySuccess`` when the document resolved cleanly,
``QueryFailure`` when parsing, operation selection, validation or execution
produced GraphQL errors. Nothing here raises for a bad query.
"""

import re
from dataclasses import dataclass, field
from typing import Any

from graphql import DocumentNode, GraphQLError, OperationDefinitionNode, get_operation_ast, parse
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from ..logging import get_logger
from ..store import UserStore, get_user_store
from .schema import schema

logger = get_logger(__name__)


class QueryRequest(BaseModel):
    """A GraphQL request: document text plus optional variables and operation name."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query: StrictStr
    variables: dict[str, Any] | None = None
    operation_name: StrictStr | None = Field(default=None, alias="operationName")


@dataclass(frozen=True)
class QuerySuccess:
    data: dict[str, Any]


@dataclass(frozen=True)
class QueryFailure:
    errors: list[dict[str, Any]] = field(default_factory=list)


QueryOutcome = QuerySuccess | QueryFailure


def describe_operation(request: QueryRequest) -> str:
    """Name the operation for logging purposes."""
    if request.operation_name:
        return request.operation_name

    q = request.query
    if "__schema" in q or "IntrospectionQuery" in q:
        return "__introspection"

    match = re.search(r"\bquery\s+(\w+)", q)
    if match:
        return match.group(1)
    return "unnamed_operation"


def select_operation_error(
    document: DocumentNode, operation_name: str | None
) -> GraphQLError | None:
    """Check that the document names exactly one operation to run.

    Returns:
        None when an operation can be selected, otherwise the GraphQL error
        explaining why not
    """
    if get_operation_ast(document, operation_name) is not None:
        return None

    if operation_name is not None:
        return GraphQLError(f"Unknown operation named '{operation_name}'.")

    has_operation = any(isinstance(d, OperationDefinitionNode) for d in document.definitions)
    if not has_operation:
        return GraphQLError("Must provide an operation.")
    return GraphQLError("Must provide operation name if query contains multiple operations.")


def execute_query(request: QueryRequest, store: UserStore | None = None) -> QueryOutcome:
    """Execute a GraphQL request against the user store.

    Args:
        request: Decoded GraphQL request
        store: User store to resolve against (defaults to the process-wide store)

    Returns:
        QuerySuccess with the response data, or QueryFailure with formatted errors
    """
    if store is None:
        store = get_user_store()

    operation = describe_operation(request)
    operation_name = request.operation_name or None

    try:
        document = parse(request.query)
    except GraphQLError as e:
        logger.info("Query rejected", operation=operation, errors=1)
        return QueryFailure(errors=[e.formatted])

    selection_error = select_operation_error(document, operation_name)
    if selection_error is not None:
        logger.info("Query rejected", operation=operation, reason=selection_error.message)
        return QueryFailure(errors=[selection_error.formatted])

    result = schema.execute_sync(
        request.query,
        variable_values=request.variables,
        context_value={"store": store},
        operation_name=operation_name,
    )

    if result.errors:
        errors = [error.formatted for error in result.errors]
        logger.info("Query rejected", operation=operation, errors=len(errors))
        return QueryFailure(errors=errors)

    logger.info("Query executed", operation=operation)
    return QuerySuccess(data=result.data or {})
