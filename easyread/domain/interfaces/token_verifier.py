"""Token verifier protocol."""

from typing import Protocol, runtime_checkable

from ..entities.user import AuthenticatedUser


@runtime_checkable
class TokenVerifier(Protocol):
    """Resolves a bearer token to the calling user."""

    def verify(self, token: str) -> AuthenticatedUser:
        """Verify a bearer token and return the caller identity.

        Raises:
            UnauthorizedError: If the token is invalid or expired.
        """
        ...
