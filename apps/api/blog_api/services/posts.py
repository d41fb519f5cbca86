"""Post service layer."""

import logging

from blog_api.core.logging_safety import safe_log_identifier
from blog_api.domain.post_policy import (
    delete_filter,
    duplicate_filter,
    ensure_can_read,
    ensure_can_update,
    visible_posts,
)
from blog_api.errors import BadRequestError
from blog_api.repositories import PostRecord, Store
from blog_api.schemas.auth import AuthenticatedIdentity
from blog_api.schemas.post import CreatePostRequest, Post, UpdatePostRequest

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, store: Store) -> None:
        self._posts = store.posts

    def list_posts(self, *, identity: AuthenticatedIdentity | None) -> list[Post]:
        records = self._posts.find_all()
        return [self._to_post(record) for record in visible_posts(identity, records)]

    def get_post(self, *, identity: AuthenticatedIdentity, post_id: int) -> Post:
        record = ensure_can_read(identity, self._posts.find_one({"id": post_id}))
        return self._to_post(record)

    def create_post(self, *, identity: AuthenticatedIdentity, payload: CreatePostRequest) -> None:
        # Not atomic with the insert: two concurrent creates can both pass.
        if self._posts.find_one(duplicate_filter(payload.title, payload.content)) is not None:
            raise BadRequestError("POST_ALREADY_EXISTS", "A post with this title or content already exists")

        record = self._posts.create(
            title=payload.title,
            content=payload.content,
            author_id=payload.author_id,
            is_hidden=payload.is_hidden,
        )
        logger.info(
            "posts.created post_id=%s caller_id=%s",
            record.id,
            safe_log_identifier(identity.user_id, prefix="uid"),
        )

    def update_post(self, *, identity: AuthenticatedIdentity, post_id: int, payload: UpdatePostRequest) -> None:
        record = ensure_can_update(identity, self._posts.find_one({"id": post_id}))
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        self._posts.update(record.id, changes)
        logger.info(
            "posts.updated post_id=%s caller_id=%s fields=%s",
            record.id,
            safe_log_identifier(identity.user_id, prefix="uid"),
            ",".join(sorted(changes)) or "-",
        )

    def delete_post(self, *, identity: AuthenticatedIdentity, post_id: int) -> int:
        deleted = self._posts.destroy(delete_filter(identity, post_id))
        logger.info(
            "posts.deleted post_id=%s caller_id=%s role=%s deleted=%s",
            post_id,
            safe_log_identifier(identity.user_id, prefix="uid"),
            identity.role.value,
            deleted,
        )
        return deleted

    @staticmethod
    def _to_post(record: PostRecord) -> Post:
        return Post(
            id=record.id,
            title=record.title,
            content=record.content,
            author_id=record.author_id,
            is_hidden=record.is_hidden,
        )
