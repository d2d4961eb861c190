"""
Conversion between HTTP payloads and the query pipeline.
"""

from typing import Any

from pydantic import ValidationError

from ..errors import TransportError
from .dispatch import QueryFailure, QueryOutcome, QueryRequest


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)


def decode_request(body: bytes | str) -> QueryRequest:
    """Decode a JSON request body into a QueryRequest.

    Args:
        body: Raw HTTP request body

    Returns:
        The decoded request

    Raises:
        TransportError: If the body is not JSON, not an object, or lacks a
            string ``query``; or if ``variables``/``operationName`` have the wrong type
    """
    try:
        return QueryRequest.model_validate_json(body)
    except ValidationError as e:
        raise TransportError(f"Invalid GraphQL request: {_describe_validation_error(e)}") from e


def encode_outcome(outcome: QueryOutcome) -> dict[str, Any]:
    """Build the GraphQL response envelope for an outcome."""
    if isinstance(outcome, QueryFailure):
        return {"data": None, "errors": list(outcome.errors)}
    return {"data": outcome.data}
