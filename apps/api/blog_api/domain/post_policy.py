"""Post visibility and mutation rules per caller role.

Every function here is pure: it takes the caller and the records already
loaded from the store and either returns a decision or raises. The service
layer owns all store access.

Known gaps, kept as shipped pending a product decision:

- creating a post never checks that ``author_id`` is the caller, so any
  authenticated user can publish as anyone;
- an ADMIN delete only matches visible posts, so only the owning BLOGGER
  can delete a hidden post.
"""

from __future__ import annotations

from typing import Any, Iterable

from blog_api.errors import BadRequestError, UnauthorizedError
from blog_api.repositories.base import AnyOf, PostRecord
from blog_api.schemas.auth import AuthenticatedIdentity
from blog_api.schemas.user import UserType

_RESTRICTED_ROLES: frozenset[UserType] = frozenset({UserType.BLOGGER})


def is_restricted(identity: AuthenticatedIdentity | None) -> bool:
    """Anonymous callers get the same view as the restricted role."""
    if identity is None:
        return True
    return identity.role in _RESTRICTED_ROLES


def visible_posts(identity: AuthenticatedIdentity | None, posts: Iterable[PostRecord]) -> list[PostRecord]:
    """Filter an already-fetched result set, preserving its order."""
    if not is_restricted(identity):
        return list(posts)
    return [post for post in posts if not post.is_hidden]


def ensure_can_read(identity: AuthenticatedIdentity, post: PostRecord | None) -> PostRecord:
    # Hidden posts answer with the not-found code so their existence stays secret.
    if is_restricted(identity) and post is not None and post.is_hidden:
        raise UnauthorizedError("POST_NOT_FOUND", "Post not found")
    if post is None:
        raise BadRequestError("POST_NOT_FOUND", "Post not found")
    return post


def ensure_can_update(identity: AuthenticatedIdentity, post: PostRecord | None) -> PostRecord:
    if is_restricted(identity) and (post is None or post.author_id != identity.user_id):
        raise UnauthorizedError("YOU_CANT_UPDATE_THIS_POST", "You can't update this post")
    if post is None:
        raise BadRequestError("YOUR_POST_NOT_FOUND", "Post not found")
    return post


def delete_filter(identity: AuthenticatedIdentity, post_id: int) -> dict[str, Any]:
    if is_restricted(identity):
        return {"id": post_id, "author_id": identity.user_id}
    return {"id": post_id, "is_hidden": False}


def duplicate_filter(title: str, content: str) -> AnyOf:
    """Match any post already using this title or this content."""
    return AnyOf({"title": title}, {"content": content})


__all__ = [
    "delete_filter",
    "duplicate_filter",
    "ensure_can_read",
    "ensure_can_update",
    "is_restricted",
    "visible_posts",
]
