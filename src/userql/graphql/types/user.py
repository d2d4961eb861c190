"""
User GraphQL type definitions
"""

import strawberry

from ...store import User as UserRecord
from ...store import UserField


@strawberry.type
class User:
    """User type for GraphQL API."""

    record: strawberry.Private[UserRecord]

    @strawberry.field
    def id(self) -> str:
        return self.record.value(UserField.ID)

    @strawberry.field
    def name(self) -> str:
        return self.record.value(UserField.NAME)

    @strawberry.field
    def email(self) -> str:
        return self.record.value(UserField.EMAIL)
