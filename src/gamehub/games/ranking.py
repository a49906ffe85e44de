"""Deterministic leaderboard ranking.

Entries are sorted by each ranking field descending, missing values last,
then by username ascending so ties never depend on row order from the
database.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

EntryT = TypeVar("EntryT", bound=BaseModel)


def _descending(value: float | None) -> tuple[bool, float]:
    return (value is None, -(value or 0))


def sort_key(entry: BaseModel, fields: Sequence[str]) -> tuple[Any, ...]:
    """Sort key for ``entry``: each field DESC with nulls last, username ASC."""
    username = getattr(entry, "username", None) or ""
    return (*(_descending(getattr(entry, name)) for name in fields), username.lower())


def rank_entries(entries: list[EntryT], fields: Sequence[str], limit: int = 50) -> list[EntryT]:
    """Sort entries, keep the top ``limit`` and number them from 1."""
    if not entries:
        return []

    ranked = sorted(entries, key=lambda e: sort_key(e, fields))[:limit]
    for idx, entry in enumerate(ranked):
        entry.rank = idx + 1  # type: ignore[attr-defined]
    return ranked
