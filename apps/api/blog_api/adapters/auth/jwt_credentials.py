"""HS256 JWT and passlib backed credential adapter."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from blog_api.adapters.auth.base import Credentials, InvalidTokenError
from blog_api.schemas.auth import TokenData

_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class JwtCredentials(Credentials):
    """Signs tokens with a process-wide shared secret.

    Anyone holding the secret can mint tokens for any user id, so rotating it
    invalidates every token issued so far.
    """

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        token_ttl_minutes: int | None = None,
    ) -> None:
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._algorithm = algorithm
        self._token_ttl_minutes = token_ttl_minutes

    def hash_password(self, password: str) -> str:
        if not password:
            raise ValueError("password_blank")
        return _pwd.hash(password)

    def compare_hash(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return _pwd.verify(password, password_hash)
        except ValueError:
            # Unrecognized or corrupt hash format.
            return False

    def generate_token(self, data: TokenData) -> str:
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "id": data.id,
            "iat": int(now.timestamp()),
        }
        if self._token_ttl_minutes is not None:
            expires_at = now + timedelta(minutes=max(1, int(self._token_ttl_minutes)))
            payload["exp"] = int(expires_at.timestamp())
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def is_valid_token(self, token: str) -> dict[str, Any]:
        if not token:
            raise InvalidTokenError("token_blank")
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("token_expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("token_invalid") from exc

    def extract_data_from_token(self, token: str) -> TokenData:
        claims = self.is_valid_token(token)
        user_id = claims.get("id")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidTokenError("token_missing_id")
        return TokenData(id=user_id)


__all__ = ["JwtCredentials"]
