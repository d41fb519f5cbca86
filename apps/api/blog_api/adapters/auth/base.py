"""Credential capability interfaces."""

from abc import ABC, abstractmethod
from typing import Any

from blog_api.schemas.auth import TokenData


class InvalidTokenError(Exception):
    """Raised when a token is malformed, expired or signed with another key."""


class Credentials(ABC):
    """Password hashing and bearer token primitives used by the API."""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Return a salted one-way hash of ``password``."""

    @abstractmethod
    def compare_hash(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a hash produced by ``hash_password``."""

    @abstractmethod
    def generate_token(self, data: TokenData) -> str:
        """Issue a signed token binding ``data``."""

    @abstractmethod
    def is_valid_token(self, token: str) -> dict[str, Any]:
        """Verify a token and return its raw claims."""

    @abstractmethod
    def extract_data_from_token(self, token: str) -> TokenData:
        """Verify a token and decode the claims written by ``generate_token``."""


__all__ = ["Credentials", "InvalidTokenError"]
