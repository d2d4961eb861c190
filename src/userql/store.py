"""
In-memory user records and the read-only store that serves them.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType

from .errors import DuplicateUserError
from .logging import get_logger

logger = get_logger(__name__)


class UserField(str, Enum):
    """Field tags of the ``User`` type."""

    ID = "id"
    NAME = "name"
    EMAIL = "email"


@dataclass(frozen=True)
class User:
    """A user record. Immutable for the lifetime of the process."""

    id: str
    name: str
    email: str

    def value(self, field: UserField) -> str:
        """Return the value stored under a field tag."""
        if field is UserField.ID:
            return self.id
        if field is UserField.NAME:
            return self.name
        if field is UserField.EMAIL:
            return self.email
        raise ValueError(f"Unknown user field: {field!r}")


def select_fields(user: User, fields: Iterable[UserField]) -> dict[str, str]:
    """Project a user onto the requested fields, keeping the requested order."""
    return {field.value: user.value(field) for field in fields}


class UserStore:
    """
    Read-only collection of users keyed by id.

    Lookup by id is the only access pattern. The store is built once and
    never changes, so it can be shared across concurrent requests.
    """

    def __init__(self, users: Iterable[User] = ()):
        by_id: dict[str, User] = {}
        for user in users:
            if user.id in by_id:
                raise DuplicateUserError(user.id)
            by_id[user.id] = user
        self._users: Mapping[str, User] = MappingProxyType(by_id)

    def get(self, user_id: str) -> User | None:
        """
        Look up a user by id.

        Args:
            user_id: Opaque user identifier

        Returns:
            The matching user, or None if no user has that id
        """
        return self._users.get(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __iter__(self) -> Iterator[User]:
        return iter(self._users.values())

    def __len__(self) -> int:
        return len(self._users)


SEED_USERS: tuple[User, ...] = (
    User(id="1", name="Pavel", email="Pavelboukine@gmail.com"),
    User(id="2", name="Charlie", email="charlie.gracie@noibu.com"),
)


@lru_cache
def get_user_store() -> UserStore:
    """Get the process-wide user store, built from the seed data on first use."""
    store = UserStore(SEED_USERS)
    logger.info("User store initialized", users=len(store))
    return store
