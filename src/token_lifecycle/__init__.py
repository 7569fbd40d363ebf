"""
token_lifecycle

Issue, validate, refresh and revoke paired access/refresh tokens:
signed, stateless JWTs backed by a server-side liveness record that
makes them revocable. Framework integrations (FastAPI, Strawberry)
live under `token_lifecycle.integrations`.
"""

__version__ = "0.1.0"

from .domain.constants import TokenClass
from .domain.entities import (
    Account,
    LivenessRecord,
    SessionInput,
    TokenClaims,
    TokenDetail,
    TokenPair,
)
from .domain.exceptions import (
    TokenLifecycleError,
    AuthenticationError,
    UnauthorizedError,
    TokenExpiredError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    MissingClaimError,
    NotFoundError,
    RecordNotFoundError,
    AccountNotFoundError,
    ConflictError,
    InvalidInputError,
    ForbiddenError,
    InternalError,
    SigningError,
    StoreUnavailableError,
    OperationTimeoutError,
)
from .domain.ports import AccountStore, LivenessStore, PasswordHasher, TokenCodec
from .domain.value_objects import Secret, derive_refresh_id
from .settings import CookieSettings, TokenSettings

from .application.lifecycle import TokenLifecycleManager

from .adapters.jwt.codec import JWTTokenCodec
from .adapters.memory.liveness_store import InMemoryLivenessStore
from .adapters.redis.liveness_store import RedisLivenessStore

__all__ = [
    "__version__",
    # domain core
    "TokenClass",
    "TokenClaims",
    "TokenDetail",
    "TokenPair",
    "LivenessRecord",
    "SessionInput",
    "Account",
    "Secret",
    "derive_refresh_id",
    "TokenCodec",
    "LivenessStore",
    "AccountStore",
    "PasswordHasher",
    # settings
    "TokenSettings",
    "CookieSettings",
    # exceptions
    "TokenLifecycleError",
    "AuthenticationError",
    "UnauthorizedError",
    "TokenExpiredError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "InvalidSignatureError",
    "MalformedTokenError",
    "MissingClaimError",
    "NotFoundError",
    "RecordNotFoundError",
    "AccountNotFoundError",
    "ConflictError",
    "InvalidInputError",
    "ForbiddenError",
    "InternalError",
    "SigningError",
    "StoreUnavailableError",
    "OperationTimeoutError",
    # application
    "TokenLifecycleManager",
    # adapters
    "JWTTokenCodec",
    "InMemoryLivenessStore",
    "RedisLivenessStore",
]
