"""In-memory repositories used for local runs and tests."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Generic, Mapping

from blog_api.repositories.base import (
    PostRecord,
    RecordT,
    Repository,
    UserRecord,
    Where,
    ensure_known_fields,
    matches,
    where_clauses,
)


class InMemoryRepository(Repository[RecordT], Generic[RecordT]):
    """Dict-backed table with auto-incrementing integer ids.

    Records are copied on the way in and out so callers never hold a live
    reference into the table.
    """

    def __init__(self, record_type: type[RecordT]) -> None:
        self.record_type = record_type
        self._rows: dict[int, RecordT] = {}
        self._next_id = 1

    def find_one(self, where: Where) -> RecordT | None:
        self._check_where(where)
        for record in self._rows.values():
            if matches(record, where):
                return replace(record)
        return None

    def find_all(self, where: Where | None = None) -> list[RecordT]:
        if where is not None:
            self._check_where(where)
        return [
            replace(record)
            for record in self._rows.values()
            if where is None or matches(record, where)
        ]

    def create(self, **values: Any) -> RecordT:
        ensure_known_fields(self.record_type, values)
        record = self.record_type(id=self._next_id, **values)
        self._rows[record.id] = record
        self._next_id += 1
        return replace(record)

    def update(self, record_id: int, values: Mapping[str, Any]) -> None:
        ensure_known_fields(self.record_type, values)
        if "id" in values:
            raise ValueError("Record ids are immutable")
        record = self._rows.get(record_id)
        if record is None or not values:
            return
        self._rows[record_id] = replace(record, **values)

    def destroy(self, where: Where) -> int:
        self._check_where(where)
        doomed = [record_id for record_id, record in self._rows.items() if matches(record, where)]
        for record_id in doomed:
            del self._rows[record_id]
        return len(doomed)

    def _check_where(self, where: Where) -> None:
        for clause in where_clauses(where):
            ensure_known_fields(self.record_type, clause)


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer for scaffolding and tests."""

    users: InMemoryRepository[UserRecord] = field(default_factory=lambda: InMemoryRepository(UserRecord))
    posts: InMemoryRepository[PostRecord] = field(default_factory=lambda: InMemoryRepository(PostRecord))

    def close(self) -> None:
        return None


__all__ = ["InMemoryRepository", "InMemoryStore"]
