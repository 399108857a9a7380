"""GraphQL error types. ``extensions.code`` is what clients branch on."""

from graphql import GraphQLError


NOT_LOGGED_IN = "You need to be logged in!"
INCORRECT_CREDENTIALS = "Incorrect credentials"


class AuthenticationError(GraphQLError):
    """Missing, invalid or expired session, or bad login credentials."""

    def __init__(self, message: str = NOT_LOGGED_IN):
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})


class InputValidationError(GraphQLError):
    def __init__(self, message: str):
        super().__init__(message, extensions={"code": "BAD_USER_INPUT"})


class OperationError(GraphQLError):
    """The store refused the write (e.g. a unique field already taken)."""

    def __init__(self, message: str):
        super().__init__(message, extensions={"code": "OPERATION_FAILED"})
