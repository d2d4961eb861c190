"""
Interactive GraphiQL page served next to the GraphQL endpoint.
"""

from functools import lru_cache

from strawberry.http.ides import GraphQL_IDE, get_graphql_ide_html


@lru_cache
def render_playground(graphql_ide: GraphQL_IDE = "graphiql") -> str:
    """Return strawberry's bundled IDE page.

    The page posts queries to its own URL, so it must be served on the
    GraphQL endpoint path.
    """
    return get_graphql_ide_html(graphql_ide=graphql_ide)
