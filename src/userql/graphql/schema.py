"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import (
    GraphQLError,
    GraphQLObjectType,
    GraphQLSchema,
    get_introspection_query,
    graphql_sync,
)
from graphql import validate_schema as gql_validate_schema

from ..errors import SchemaError
from ..logging import get_logger
from ..store import UserField
from .queries.root import Query

logger = get_logger(__name__)


class UserqlSchema(strawberry.Schema):
    """Strawberry schema that reports execution errors through structlog."""

    def process_errors(self, errors: list[GraphQLError], execution_context: Any = None) -> None:
        _ = execution_context
        for error in errors:
            logger.info("GraphQL error", message=error.message, path=error.path)


# Read-only schema: no mutation or subscription type.
# Introspection is enabled by default in strawberry; the playground relies on it.
schema = UserqlSchema(query=Query)


ROOT_FIELD = "userById"
USER_FIELDS = [field.value for field in UserField]


def check_schema(graphql_schema: GraphQLSchema) -> None:
    """Check that a schema is valid and exposes the user lookup contract.

    Raises:
        SchemaError: If graphql-core rejects the schema, introspection fails,
            or ``userById``/``User`` do not have the expected shape
    """
    problems = [str(e) for e in gql_validate_schema(graphql_schema)]
    if problems:
        raise SchemaError(f"Invalid schema: {'; '.join(problems)}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        raise SchemaError(f"Introspection failed: {'; '.join(str(e) for e in result.errors)}")

    if graphql_schema.mutation_type is not None or graphql_schema.subscription_type is not None:
        raise SchemaError("Schema must be read-only")

    root_field = graphql_schema.query_type.fields.get(ROOT_FIELD)
    if root_field is None:
        raise SchemaError(f"Query type has no '{ROOT_FIELD}' field")

    id_arg = root_field.args.get("id")
    if id_arg is None or str(id_arg.type) != "String!":
        raise SchemaError(f"'{ROOT_FIELD}' must take a required 'id: String!' argument")

    # Nullable return: a miss resolves to null
    if str(root_field.type) != "User":
        raise SchemaError(f"'{ROOT_FIELD}' must return nullable 'User', not '{root_field.type}'")

    user_type = graphql_schema.get_type("User")
    if not isinstance(user_type, GraphQLObjectType):
        raise SchemaError("Schema has no 'User' object type")

    declared = {name: str(f.type) for name, f in user_type.fields.items()}
    if declared != {name: "String!" for name in USER_FIELDS}:
        raise SchemaError(f"'User' fields do not match {USER_FIELDS}: {declared}")


def validate_schema() -> None:
    """Validate the application schema at startup so the server fails fast."""
    try:
        check_schema(schema._schema)
    except SchemaError as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise

    logger.info("GraphQL schema validation successful", root_field=ROOT_FIELD)


def schema_sdl() -> str:
    """Return the schema in GraphQL SDL form."""
    return schema.as_str()
