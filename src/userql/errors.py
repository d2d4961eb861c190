"""
Exception hierarchy for the userql service
"""


class UserqlError(Exception):
    """Base class for all userql errors."""


class DuplicateUserError(UserqlError):
    """Raised when a user store is built with two records sharing an id."""

    def __init__(self, user_id: str):
        super().__init__(f"Duplicate user id: {user_id!r}")
        self.user_id = user_id


class TransportError(UserqlError):
    """The request body cannot be read as a GraphQL request envelope.

    Raised before the query reaches the schema; the HTTP layer answers it
    with a 400 and no GraphQL response body.
    """


class SchemaError(UserqlError):
    """The GraphQL schema is invalid or does not expose the user lookup."""
