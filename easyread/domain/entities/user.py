"""Authenticated caller identity."""

from typing import Optional

from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Identity returned by a token verifier."""

    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
