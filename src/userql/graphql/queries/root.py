"""
Root GraphQL query definitions
"""

import strawberry

from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    def user_by_id(self, info: strawberry.Info, id: str) -> User | None:
        """Get a user by ID."""
        from ..resolvers.user import resolve_user_by_id

        return resolve_user_by_id(info, id)
