"""Authentication error constants for bearer-token resolution.

These are NOT exceptions. They are error values carried by Failure results
from the token verifier, logged by the auth resolver, and never surfaced to
the client (an unverifiable token resolves to an anonymous request).

Usage:
    from cms_router.domain.errors import AuthenticationError
    from cms_router.core.result import Failure

    match verifier.verify(token):
        case Failure(error=AuthenticationError.EXPIRED_TOKEN):
            ...
"""


class AuthenticationError:
    """Authentication error constants.

    Error Categories:
        - Token errors: INVALID_TOKEN, EXPIRED_TOKEN, MALFORMED_TOKEN
        - Subject errors: MISSING_SUBJECT, USER_NOT_FOUND
        - Configuration errors: MISSING_SECRET
    """

    # Token validation errors
    INVALID_TOKEN = "Invalid token"
    EXPIRED_TOKEN = "Token expired"
    MALFORMED_TOKEN = "Malformed token"

    # Subject errors
    MISSING_SUBJECT = "Token payload missing user ID"
    USER_NOT_FOUND = "User not found"

    # Configuration errors
    MISSING_SECRET = "No engine secret configured"
