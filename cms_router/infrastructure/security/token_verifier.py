"""Bearer token verifier (adapter).

Verifies tokens issued by the content engine using PyJWT with HMAC-SHA256.
The engine signs with a key derived from its shared secret, so the same
derivation is applied here before verification.

Security:
    - HMAC-SHA256 (HS256) algorithm
    - Signature and ``exp`` checked on every verification
    - Returns Failure values, never raises for bad tokens
"""

import hashlib
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import (
    DecodeError,
    ExpiredSignatureError,
    InvalidSignatureError,
    InvalidTokenError,
)

from cms_router.core.result import Failure, Result, Success
from cms_router.domain.errors import AuthenticationError

VERIFICATION_KEY_LENGTH = 32


def derive_verification_key(secret: str) -> str:
    """Derive the token signing key from the engine secret.

    Args:
        secret: The engine's configured shared secret.

    Returns:
        First 32 hex characters of the secret's SHA-256 digest.
    """
    digest = hashlib.sha256(secret.encode("utf-8")).hexdigest()
    return digest[:VERIFICATION_KEY_LENGTH]


class TokenVerifier:
    """Verify (and, for tooling, issue) engine-compatible bearer tokens.

    Usage:
        verifier = TokenVerifier(secret=engine.config.secret)

        match verifier.verify(token):
            case Success(value=claims):
                user_id = claims.get("id")
            case Failure(error=error):
                ...
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        """Initialize the verifier.

        Args:
            secret: Engine shared secret (raw, not yet derived).
            algorithm: JWT signing algorithm.

        Raises:
            ValueError: If secret is empty.
        """
        if not secret:
            msg = "Token verifier requires a non-empty secret"
            raise ValueError(msg)

        self._key = derive_verification_key(secret)
        self._algorithm = algorithm

    def verify(self, token: str) -> Result[dict[str, Any], str]:
        """Verify a token's signature and expiry and return its claims.

        Args:
            token: Encoded JWT string.

        Returns:
            Success with the claims dict, or Failure with an
            AuthenticationError constant.
        """
        try:
            claims: dict[str, Any] = jwt.decode(
                token, self._key, algorithms=[self._algorithm]
            )
        except ExpiredSignatureError:
            return Failure(error=AuthenticationError.EXPIRED_TOKEN)
        except InvalidSignatureError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)
        except DecodeError:
            return Failure(error=AuthenticationError.MALFORMED_TOKEN)
        except InvalidTokenError:
            return Failure(error=AuthenticationError.INVALID_TOKEN)

        return Success(value=claims)

    def issue(
        self,
        claims: dict[str, Any],
        expires_in: timedelta = timedelta(hours=2),
    ) -> str:
        """Sign a token the way the engine does.

        Args:
            claims: Token claims, typically ``id``, ``collection``, ``email``.
            expires_in: Lifetime added to the current time as ``exp``.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(UTC)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + expires_in).timestamp()),
        }
        token: str = jwt.encode(payload, self._key, algorithm=self._algorithm)
        return token
