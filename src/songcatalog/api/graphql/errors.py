"""Typed GraphQL errors, told apart by ``extensions.code``."""

from graphql import GraphQLError


class BadUserInputError(GraphQLError):
    """Invalid input or an expected write failure (title taken, version outdated, ...)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, extensions={"code": "BAD_USER_INPUT"})


class UnauthenticatedError(GraphQLError):
    """The operation needs a bearer token."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})


class ForbiddenError(GraphQLError):
    """The caller's token lacks the required role."""

    def __init__(self, message: str) -> None:
        super().__init__(message, extensions={"code": "FORBIDDEN"})
