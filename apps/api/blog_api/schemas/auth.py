"""Authentication schemas."""

from pydantic import BaseModel

from blog_api.schemas.user import User, UserType


class TokenData(BaseModel):
    """Claims bound into every bearer token."""

    id: int


class AuthenticatedIdentity(BaseModel):
    """Request-scoped caller identity, resolved fresh on every request."""

    user: User
    token_payload: TokenData

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def role(self) -> UserType:
        return self.user.type
