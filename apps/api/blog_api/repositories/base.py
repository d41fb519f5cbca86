"""Record types, filter predicates and the repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Generic, Mapping, TypeVar, Union

from blog_api.schemas.user import UserType


@dataclass(slots=True)
class UserRecord:
    id: int
    email: str
    password_hash: str
    type: UserType


@dataclass(slots=True)
class PostRecord:
    id: int
    title: str
    content: str
    author_id: int
    is_hidden: bool = False


RecordT = TypeVar("RecordT", UserRecord, PostRecord)


@dataclass(frozen=True, slots=True)
class AnyOf:
    """OR across equality clauses; each clause is itself an AND of its keys."""

    clauses: tuple[Mapping[str, Any], ...]

    def __init__(self, *clauses: Mapping[str, Any]) -> None:
        if not clauses:
            raise ValueError("AnyOf requires at least one clause")
        object.__setattr__(self, "clauses", tuple(clauses))


Where = Union[Mapping[str, Any], AnyOf]


def record_field_names(record_type: type) -> tuple[str, ...]:
    return tuple(f.name for f in fields(record_type))


def ensure_known_fields(record_type: type, names: Any) -> None:
    known = record_field_names(record_type)
    unknown = sorted(set(names) - set(known))
    if unknown:
        raise ValueError(f"Unknown {record_type.__name__} fields: {', '.join(unknown)}")


def where_clauses(where: Where) -> tuple[Mapping[str, Any], ...]:
    if isinstance(where, AnyOf):
        return where.clauses
    return (where,)


def matches(record: Any, where: Where) -> bool:
    """Evaluate a filter against one record in memory."""
    return any(
        all(getattr(record, key) == value for key, value in clause.items())
        for clause in where_clauses(where)
    )


class Repository(ABC, Generic[RecordT]):
    """Minimal CRUD surface over one record type."""

    record_type: type

    @abstractmethod
    def find_one(self, where: Where) -> RecordT | None:
        """Return the first matching record in id order."""

    @abstractmethod
    def find_all(self, where: Where | None = None) -> list[RecordT]:
        """Return matching records in id order; all records when unfiltered."""

    @abstractmethod
    def create(self, **values: Any) -> RecordT:
        """Insert a record and return it with its store-assigned id."""

    @abstractmethod
    def update(self, record_id: int, values: Mapping[str, Any]) -> None:
        """Overwrite the given fields of one record; no-op if it is missing."""

    @abstractmethod
    def destroy(self, where: Where) -> int:
        """Delete matching records and return how many were removed."""


__all__ = [
    "AnyOf",
    "PostRecord",
    "Repository",
    "UserRecord",
    "Where",
    "ensure_known_fields",
    "matches",
    "record_field_names",
    "where_clauses",
]
