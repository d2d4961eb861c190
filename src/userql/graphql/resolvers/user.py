from __future__ import annotations

import strawberry

from ...logging import get_logger
from ...store import UserStore
from ..types.user import User

logger = get_logger(__name__)


def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    store: UserStore = info.context["store"]

    record = store.get(id)
    if record is None:
        logger.debug("User not found", user_id=id)
        return None

    return User(record=record)
