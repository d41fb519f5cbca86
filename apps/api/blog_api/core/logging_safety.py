"""Helpers that keep user-controlled identifiers out of log lines."""

from __future__ import annotations

import hashlib
from typing import Any

_DIGEST_LENGTH = 12


def safe_log_identifier(value: Any, *, prefix: str) -> str:
    """Return a deterministic non-reversible token for a log field.

    Integer ids are hashed too, so ``0`` is a real value rather than missing.
    """
    if value is None:
        return f"{prefix}-missing"
    text = str(value).strip()
    if not text:
        return f"{prefix}-missing"

    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:_DIGEST_LENGTH]
    return f"{prefix}-{digest}"


def safe_log_email(email: str | None) -> str:
    """Case-fold before hashing so one account always logs the same token."""
    return safe_log_identifier((email or "").strip().lower() or None, prefix="email")
