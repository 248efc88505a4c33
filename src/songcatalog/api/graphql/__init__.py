"""GraphQL endpoint mounted at /graphql."""

from strawberry.fastapi import GraphQLRouter

from songcatalog.api.graphql.context import SongContext, get_graphql_context
from songcatalog.api.graphql.schema import schema

graphql_router: GraphQLRouter = GraphQLRouter(schema, context_getter=get_graphql_context)

__all__ = ["SongContext", "graphql_router", "schema"]
