from .auth import (
    StrawberryAuthContext,
    StrawberryTokenAuth,
    create_strawberry_auth,
)

__all__ = [
    "StrawberryAuthContext",
    "StrawberryTokenAuth",
    "create_strawberry_auth",
]
