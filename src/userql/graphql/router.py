"""
FastAPI routes for the GraphQL endpoint, the playground and the SDL export
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from ..config import settings
from ..errors import TransportError
from ..logging import get_logger
from ..store import UserStore, get_user_store
from .adapter import decode_request, encode_outcome
from .dispatch import execute_query
from .playground import render_playground
from .schema import schema_sdl

logger = get_logger(__name__)


def create_graphql_router(
    path: str | None = None,
    playground_enabled: bool | None = None,
) -> APIRouter:
    """Create the GraphQL router for FastAPI.

    Args:
        path: Endpoint path (defaults to ``settings.graphql_path``)
        playground_enabled: Serve the playground on GET (defaults to settings)
    """
    path = path or settings.graphql_path
    if playground_enabled is None:
        playground_enabled = settings.playground_enabled

    router = APIRouter()

    @router.post(path)
    async def graphql_endpoint(  # pyright: ignore [reportUnusedFunction]
        request: Request,
        store: UserStore = Depends(get_user_store),
    ) -> JSONResponse:
        """Execute a GraphQL document."""
        body = await request.body()
        try:
            query_request = decode_request(body)
        except TransportError as e:
            logger.warning("Malformed GraphQL request", error=str(e))
            raise HTTPException(status_code=400, detail=str(e)) from e

        outcome = await run_in_threadpool(execute_query, query_request, store)
        return JSONResponse(content=encode_outcome(outcome))

    @router.get(f"{path}/schema", response_class=PlainTextResponse)
    async def graphql_sdl() -> str:  # pyright: ignore [reportUnusedFunction]
        """Return the schema in SDL form."""
        return schema_sdl()

    if playground_enabled:

        @router.get(path, response_class=HTMLResponse)
        async def graphql_playground() -> str:  # pyright: ignore [reportUnusedFunction]
            """Serve the interactive playground."""
            return render_playground()

    return router
