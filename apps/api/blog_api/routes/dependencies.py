"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blog_api.adapters.auth import Credentials, InvalidTokenError, JwtCredentials
from blog_api.core.config import Settings, get_settings
from blog_api.core.logging_safety import safe_log_identifier
from blog_api.errors import UnauthorizedError
from blog_api.repositories import Store
from blog_api.schemas.auth import AuthenticatedIdentity
from blog_api.services.posts import PostService
from blog_api.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request) -> str:
    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        return correlation_id
    return f"req-{uuid4()}"


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_credentials(settings: Annotated[Settings, Depends(get_settings)]) -> Credentials:
    """Build the credential adapter from the cached process settings."""
    return JwtCredentials(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        token_ttl_minutes=settings.token_ttl_minutes,
    )


def _reject(request: Request, correlation_id: str, code: str, reason: str) -> UnauthorizedError:
    logger.warning(
        "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
        safe_log_identifier(correlation_id, prefix="cid"),
        request.method,
        request.url.path,
        reason,
    )
    return UnauthorizedError(code)


def _authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    verifier: Credentials,
    store: Store,
) -> AuthenticatedIdentity:
    correlation_id = _request_correlation_id(request)
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise _reject(request, correlation_id, "MISSING_TOKEN", "missing_bearer")

    try:
        token_data = verifier.extract_data_from_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise _reject(request, correlation_id, "INVALID_TOKEN", str(exc) or "token_invalid") from exc

    # One read per request; role changes apply on the caller's next request.
    record = store.users.find_one({"id": token_data.id})
    if record is None:
        raise _reject(request, correlation_id, "USER_NOT_FOUND", "user_not_found")

    identity = AuthenticatedIdentity(user=UserService.to_user(record), token_payload=token_data)
    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s user_id=%s role=%s",
        safe_log_identifier(correlation_id, prefix="cid"),
        request.method,
        request.url.path,
        safe_log_identifier(identity.user_id, prefix="uid"),
        identity.role.value,
    )
    return identity


async def get_authenticated_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[Credentials, Depends(get_credentials)],
    store: Annotated[Store, Depends(get_store)],
) -> AuthenticatedIdentity:
    """Validate the bearer token and resolve the calling user."""
    return _authenticate(request, credentials, verifier, store)


async def get_optional_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    verifier: Annotated[Credentials, Depends(get_credentials)],
    store: Annotated[Store, Depends(get_store)],
) -> AuthenticatedIdentity | None:
    """Like ``get_authenticated_identity`` but anonymous requests resolve to None.

    A header that is present but unusable is still rejected.
    """
    if "authorization" not in request.headers:
        return None
    return _authenticate(request, credentials, verifier, store)


def get_post_service(store: Annotated[Store, Depends(get_store)]) -> PostService:
    return PostService(store)


def get_user_service(
    store: Annotated[Store, Depends(get_store)],
    credentials: Annotated[Credentials, Depends(get_credentials)],
) -> UserService:
    return UserService(store, credentials)
