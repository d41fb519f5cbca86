"""User API schemas."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserType(str, Enum):
    ADMIN = "ADMIN"
    BLOGGER = "BLOGGER"


class User(BaseModel):
    """Public user representation; the password hash is never part of it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    email: str
    type: UserType


class CreateUserRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)
    type: UserType = UserType.BLOGGER


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str
