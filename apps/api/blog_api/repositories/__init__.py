"""Persistence layer."""

from __future__ import annotations

from typing import Protocol

from blog_api.core.config import Settings
from blog_api.repositories.base import AnyOf, PostRecord, Repository, UserRecord, Where
from blog_api.repositories.memory import InMemoryRepository, InMemoryStore
from blog_api.repositories.sqlite import SqliteRepository, SqliteStore


class Store(Protocol):
    users: Repository[UserRecord]
    posts: Repository[PostRecord]

    def close(self) -> None: ...


def build_store(settings: Settings) -> Store:
    """Open the backend selected by configuration."""
    if settings.storage_backend == "sqlite":
        return SqliteStore(settings.sqlite_path)
    return InMemoryStore()


__all__ = [
    "AnyOf",
    "InMemoryRepository",
    "InMemoryStore",
    "PostRecord",
    "Repository",
    "SqliteRepository",
    "SqliteStore",
    "Store",
    "UserRecord",
    "Where",
    "build_store",
]
