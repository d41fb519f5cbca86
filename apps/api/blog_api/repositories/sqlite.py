"""SQLite-backed repositories."""

from __future__ import annotations

import logging
import sqlite3
from enum import Enum
from typing import Any, Callable, Generic, Mapping

from blog_api.repositories.base import (
    PostRecord,
    RecordT,
    Repository,
    UserRecord,
    Where,
    ensure_known_fields,
    record_field_names,
    where_clauses,
)
from blog_api.schemas.user import UserType

logger = logging.getLogger(__name__)

# No UNIQUE on posts.title or posts.content: the post service checks for
# duplicates before inserting.
_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    type TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS posts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    author_id INTEGER NOT NULL,
    is_hidden INTEGER NOT NULL DEFAULT 0
);
"""

_COLUMN_DECODERS: dict[type, dict[str, Callable[[Any], Any]]] = {
    UserRecord: {"type": UserType},
    PostRecord: {"is_hidden": bool},
}


_SQLITE_INT_MIN = -(2**63)
_SQLITE_INT_MAX = 2**63 - 1


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return int(value)
    return value


def _fits_integer_column(value: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return _SQLITE_INT_MIN <= value <= _SQLITE_INT_MAX
    return True


def _compile_where(where: Where) -> tuple[str, list[Any]]:
    parts: list[str] = []
    params: list[Any] = []
    for clause in where_clauses(where):
        if not clause:
            parts.append("1 = 1")
            continue
        # No stored row can hold an integer sqlite3 refuses to bind.
        if not all(_fits_integer_column(value) for value in clause.values()):
            parts.append("1 = 0")
            continue
        parts.append("(" + " AND ".join(f"{column} = ?" for column in clause) + ")")
        params.extend(_encode(value) for value in clause.values())
    return " OR ".join(parts), params


class SqliteRepository(Repository[RecordT], Generic[RecordT]):
    def __init__(self, conn: sqlite3.Connection, table: str, record_type: type[RecordT]) -> None:
        self.conn = conn
        self.table = table
        self.record_type = record_type
        self._columns = record_field_names(record_type)
        self._decoders = _COLUMN_DECODERS.get(record_type, {})

    def find_one(self, where: Where) -> RecordT | None:
        rows = self._select(where, limit=1)
        return rows[0] if rows else None

    def find_all(self, where: Where | None = None) -> list[RecordT]:
        return self._select(where)

    def create(self, **values: Any) -> RecordT:
        ensure_known_fields(self.record_type, values)
        columns = list(values)
        placeholders = ", ".join("?" for _ in columns)
        cur = self.conn.execute(
            f"INSERT INTO {self.table} ({', '.join(columns)}) VALUES ({placeholders})",
            [_encode(values[column]) for column in columns],
        )
        created = self.find_one({"id": int(cur.lastrowid)})
        if created is None:
            raise RuntimeError(f"Inserted row {cur.lastrowid} missing from {self.table}")
        return created

    def update(self, record_id: int, values: Mapping[str, Any]) -> None:
        ensure_known_fields(self.record_type, values)
        if "id" in values:
            raise ValueError("Record ids are immutable")
        if not values or not _fits_integer_column(record_id):
            return
        sets = ", ".join(f"{column} = ?" for column in values)
        params = [_encode(value) for value in values.values()] + [int(record_id)]
        self.conn.execute(f"UPDATE {self.table} SET {sets} WHERE id = ?", params)

    def destroy(self, where: Where) -> int:
        self._check_where(where)
        clause_sql, params = _compile_where(where)
        cur = self.conn.execute(f"DELETE FROM {self.table} WHERE {clause_sql}", params)
        return int(cur.rowcount)

    def _select(self, where: Where | None, *, limit: int | None = None) -> list[RecordT]:
        sql = f"SELECT {', '.join(self._columns)} FROM {self.table}"
        params: list[Any] = []
        if where is not None:
            self._check_where(where)
            clause_sql, params = _compile_where(where)
            sql += f" WHERE {clause_sql}"
        sql += " ORDER BY id"
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
        return [self._to_record(row) for row in self.conn.execute(sql, params).fetchall()]

    def _to_record(self, row: sqlite3.Row) -> RecordT:
        values = {column: row[column] for column in self._columns}
        for column, decode in self._decoders.items():
            values[column] = decode(values[column])
        return self.record_type(**values)

    def _check_where(self, where: Where) -> None:
        for clause in where_clauses(where):
            ensure_known_fields(self.record_type, clause)


class SqliteStore:
    """Opens one autocommit connection and exposes a repository per table."""

    def __init__(self, path: str) -> None:
        self.path = path
        # Route handlers and threadpool workers may both touch the connection.
        self.conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        self.conn.row_factory = sqlite3.Row
        self.conn.executescript(_SCHEMA_SQL)
        logger.info("storage.sqlite_opened path=%s", path)
        self.users: SqliteRepository[UserRecord] = SqliteRepository(self.conn, "users", UserRecord)
        self.posts: SqliteRepository[PostRecord] = SqliteRepository(self.conn, "posts", PostRecord)

    def close(self) -> None:
        self.conn.close()


__all__ = ["SqliteRepository", "SqliteStore"]
