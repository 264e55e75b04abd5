"""JWT implementation of TokenVerifier."""

import logging
from typing import Optional, Sequence

from jose import JWTError, jwt

from ..domain.entities.user import AuthenticatedUser
from ..domain.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class JWTTokenVerifier:
    """Verifies signed JWTs and maps the ``sub`` claim to the user id."""

    def __init__(
        self,
        key: str,
        algorithms: Sequence[str] = ("HS256",),
        audience: Optional[str] = None,
        issuer: Optional[str] = None,
    ):
        """
        Args:
            key: Shared secret or PEM public key.
            algorithms: Accepted signing algorithms.
            audience: Expected ``aud`` claim, checked only when set.
            issuer: Expected ``iss`` claim, checked only when set.
        """
        self.key = key
        self.algorithms = list(algorithms)
        self.audience = audience
        self.issuer = issuer

    def verify(self, token: str) -> AuthenticatedUser:
        try:
            claims = jwt.decode(
                token,
                self.key,
                algorithms=self.algorithms,
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_aud": self.audience is not None},
            )
        except JWTError as e:
            logger.warning(f"Token verification failed: {e}")
            raise UnauthorizedError("유효하지 않은 토큰입니다. (Invalid token)") from e

        uid = claims.get("sub") or claims.get("uid")
        if not uid:
            raise UnauthorizedError("토큰에 사용자 식별자가 없습니다. (No subject)")

        return AuthenticatedUser(uid=uid, email=claims.get("email"), name=claims.get("name"))
