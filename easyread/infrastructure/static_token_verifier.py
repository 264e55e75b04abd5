"""Static token table implementation of TokenVerifier for development."""

from typing import Dict

from ..domain.entities.user import AuthenticatedUser
from ..domain.errors import UnauthorizedError


class StaticTokenVerifier:
    """Accepts only tokens listed in a fixed table.

    Intended for local development and tests; never use it in production.
    """

    def __init__(self, users: Dict[str, AuthenticatedUser] | None = None):
        self._users: Dict[str, AuthenticatedUser] = dict(users or {})

    def verify(self, token: str) -> AuthenticatedUser:
        if token not in self._users:
            raise UnauthorizedError("유효하지 않은 토큰입니다. (Invalid token)")
        return self._users[token]

    def add_token(self, token: str, user: AuthenticatedUser) -> None:
        self._users[token] = user
