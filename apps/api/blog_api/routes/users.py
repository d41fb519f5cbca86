"""User routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from blog_api.routes.dependencies import get_authenticated_identity, get_user_service
from blog_api.schemas.auth import AuthenticatedIdentity
from blog_api.schemas.error import ErrorResponse
from blog_api.schemas.user import CreateUserRequest, LoginRequest, TokenResponse, User
from blog_api.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}},
)
async def create_user(
    payload: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    await service.register(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    payload: LoginRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> TokenResponse:
    token = await service.login(email=payload.email, password=payload.password)
    return TokenResponse(token=token)


@router.get(
    "",
    response_model=list[User],
    responses={401: {"model": ErrorResponse}},
)
async def list_users(
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[User]:
    return service.list_users()


@router.get(
    "/me",
    response_model=User,
    responses={401: {"model": ErrorResponse}},
)
async def get_current_user(
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
) -> User:
    return identity.user


@router.get(
    "/{id}",
    response_model=User,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def get_user(
    user_id: Annotated[int, Path(alias="id")],
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.get_user(user_id=user_id)
