class TokenLifecycleError(Exception):
    """Base class for every error raised by token_lifecycle."""
    pass


class AuthenticationError(TokenLifecycleError):
    """Raised when a credential cannot be accepted."""
    pass


class UnauthorizedError(AuthenticationError):
    """Raised when a token is revoked, lapsed, or bound to another user."""
    pass


class TokenExpiredError(AuthenticationError):
    """Raised when token has expired."""
    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when an identifier/password pair does not match an account."""
    pass


class InvalidTokenError(AuthenticationError):
    """Raised when token is malformed or invalid."""
    pass


class InvalidSignatureError(InvalidTokenError):
    """Raised when the signature or signing algorithm does not match."""
    pass


class MalformedTokenError(InvalidTokenError):
    """Raised when the token or its claims cannot be parsed."""
    pass


class MissingClaimError(MalformedTokenError):
    """Raised when a required claim is absent from a well-formed token."""
    pass


class NotFoundError(TokenLifecycleError):
    """Raised when a requested record does not exist."""
    pass


class RecordNotFoundError(NotFoundError):
    """Raised by a liveness store when a token-id is absent or lapsed."""
    pass


class AccountNotFoundError(NotFoundError):
    """Raised by an account store when an identifier is unknown."""
    pass


class ConflictError(TokenLifecycleError):
    """Raised when an account identifier is already registered."""
    pass


class InvalidInputError(TokenLifecycleError):
    """Raised when caller-supplied input fails validation."""
    pass


class ForbiddenError(TokenLifecycleError):
    """Raised when an anonymous-only action is attempted with a session."""
    pass


class InternalError(TokenLifecycleError):
    """Raised on failures the caller cannot fix (store, encoding, deadline)."""
    pass


class SigningError(InternalError):
    """Raised when claims cannot be encoded and signed."""
    pass


class StoreUnavailableError(InternalError):
    """Raised when the liveness store backend cannot be reached."""
    pass


class OperationTimeoutError(InternalError):
    """Raised when an operation does not finish before its deadline."""
    pass
