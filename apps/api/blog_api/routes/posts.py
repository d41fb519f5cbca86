"""Post routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from blog_api.routes.dependencies import get_authenticated_identity, get_optional_identity, get_post_service
from blog_api.schemas.auth import AuthenticatedIdentity
from blog_api.schemas.error import ErrorResponse
from blog_api.schemas.post import CreatePostRequest, Post, UpdatePostRequest
from blog_api.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.get(
    "",
    response_model=list[Post],
    responses={401: {"model": ErrorResponse}},
)
async def list_posts(
    identity: Annotated[AuthenticatedIdentity | None, Depends(get_optional_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> list[Post]:
    return service.list_posts(identity=identity)


@router.post(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def create_post(
    payload: CreatePostRequest,
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    service.create_post(identity=identity, payload=payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{id}",
    response_model=Post,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def get_post(
    post_id: Annotated[int, Path(alias="id")],
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.get_post(identity=identity, post_id=post_id)


@router.put(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
async def update_post(
    post_id: Annotated[int, Path(alias="id")],
    payload: UpdatePostRequest,
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    service.update_post(identity=identity, post_id=post_id, payload=payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}},
)
async def delete_post(
    post_id: Annotated[int, Path(alias="id")],
    identity: Annotated[AuthenticatedIdentity, Depends(get_authenticated_identity)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Response:
    # No match is not an error; deletes are idempotent.
    service.delete_post(identity=identity, post_id=post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
