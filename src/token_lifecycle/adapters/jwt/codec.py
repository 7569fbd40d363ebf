import json
import time
from typing import Any, Callable, Mapping, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode
from jwt.exceptions import (
    DecodeError,
    InvalidAlgorithmError,
    InvalidIssuerError,
    InvalidSignatureError as JWTInvalidSignatureError,
    InvalidTokenError as JWTInvalidTokenError,
    MissingRequiredClaimError,
)

from ...domain.constants import SIGNING_ALGORITHM
from ...domain.entities import TokenClaims
from ...domain.exceptions import (
    InvalidSignatureError,
    InvalidTokenError,
    MalformedTokenError,
    MissingClaimError,
    SigningError,
    TokenExpiredError,
)
from ...domain.ports import TokenCodec
from ...domain.value_objects import Secret

_REQUIRED_CLAIMS = ["iss", "aud", "jti", "iat", "exp"]


class JWTTokenCodec(TokenCodec):
    """
    Adapter implementing the TokenCodec port with PyJWT (HS256).

    Infrastructure layer:
    - Knows about JWT structure, signing and verification.
    - Never touches the liveness store; a verified token is not
      necessarily a live one.
    """

    def __init__(
        self,
        issuer: Optional[str] = None,
        leeway_seconds: int = 0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._issuer = issuer
        self._leeway = leeway_seconds
        self._clock = clock

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def sign(self, claims: TokenClaims, secret: Secret) -> str:
        try:
            return jwt.encode(
                claims.to_payload(),
                bytes(secret),
                algorithm=SIGNING_ALGORITHM,
            )
        except (TypeError, ValueError, JWTInvalidTokenError) as exc:
            raise SigningError(f"Could not sign token: {exc}") from exc

    def verify(self, token: str, secret: Secret) -> TokenClaims:
        """
        Decode and validate a signed token.

        Returns:
            TokenClaims parsed from the payload.

        Raises:
            TokenExpiredError
            InvalidSignatureError
            MissingClaimError
            MalformedTokenError
            InvalidTokenError
        """
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Token is empty")

        if self._signing_input_parses(token) and not self._canonical_signature(token):
            raise InvalidSignatureError("Signature segment is not canonical base64url")

        try:
            payload = jwt.decode(
                token,
                bytes(secret),
                algorithms=[SIGNING_ALGORITHM],
                issuer=self._issuer,
                leeway=self._leeway,
                # aud carries the user-id; it is checked against the
                # liveness store, not against a fixed audience.
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_aud": False,
                    "verify_exp": False,
                },
            )
        except (JWTInvalidSignatureError, InvalidAlgorithmError) as exc:
            raise InvalidSignatureError(f"Invalid signature: {exc}") from exc
        except MissingRequiredClaimError as exc:
            raise MissingClaimError(f"Missing claim: {exc.claim}") from exc
        except DecodeError as exc:
            raise MalformedTokenError(f"Malformed token: {exc}") from exc
        except InvalidIssuerError as exc:
            raise InvalidTokenError(f"Invalid issuer: {exc}") from exc
        except JWTInvalidTokenError as exc:
            raise MalformedTokenError(f"Invalid token: {exc}") from exc

        claims = self._claims_from_payload(payload)

        # Valid through the whole second named by exp.
        if int(self._clock()) > claims.expires_at + self._leeway:
            raise TokenExpiredError("Token has expired")
        return claims

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _signing_input_parses(token: str) -> bool:
        parts = token.split(".", 2)
        if len(parts) != 3:
            return False
        try:
            header = json.loads(base64url_decode(parts[0]))
            payload = json.loads(base64url_decode(parts[1]))
        except (TypeError, ValueError):
            return False
        return isinstance(header, dict) and isinstance(payload, dict)

    @staticmethod
    def _canonical_signature(token: str) -> bool:
        """
        True when the signature segment is exactly what base64url would
        produce for its decoded bytes. Stray characters, padding and
        altered trailing bits all fail this.
        """
        signature = token.split(".", 2)[2]
        try:
            raw = base64url_decode(signature)
        except (TypeError, ValueError):
            return False
        return base64url_encode(raw).decode("ascii") == signature

    @staticmethod
    def _claims_from_payload(payload: Mapping[str, Any]) -> TokenClaims:
        issuer = payload.get("iss")
        audience = payload.get("aud")
        token_id = payload.get("jti")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")

        for name, value in (("iss", issuer), ("aud", audience), ("jti", token_id)):
            if not isinstance(value, str):
                raise MalformedTokenError(f"Claim {name!r} must be a string")
            if not value:
                raise MissingClaimError(f"Missing claim: {name}")

        for name, value in (("iat", issued_at), ("exp", expires_at)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise MalformedTokenError(f"Claim {name!r} must be a timestamp")

        return TokenClaims(
            issuer=issuer,
            audience=audience,
            token_id=token_id,
            issued_at=int(issued_at),
            expires_at=int(expires_at),
        )
