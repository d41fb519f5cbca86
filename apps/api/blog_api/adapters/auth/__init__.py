"""Credential adapters."""

from .base import Credentials, InvalidTokenError
from .jwt_credentials import JwtCredentials

__all__ = [
    "Credentials",
    "InvalidTokenError",
    "JwtCredentials",
]
