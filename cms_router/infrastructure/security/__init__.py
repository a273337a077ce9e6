"""Security adapters.

Usage:
    from cms_router.infrastructure.security import TokenVerifier
"""

from cms_router.infrastructure.security.token_verifier import (
    TokenVerifier,
    derive_verification_key,
)

__all__ = ["TokenVerifier", "derive_verification_key"]
