"""Word lists for TypeMaster custom lessons.

Lists live in one JSON file, ``{"lists": [{"id", "name", "words"}]}``.
Sessions typed from list ``<id>`` are recorded with lesson id ``custom-<id>``.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from gamehub.games.schemas import SpellingList, SpellingListsResponse

logger = structlog.get_logger()


def load_spelling_lists(path: str | Path) -> list[SpellingList]:
    """Read every list from ``path``. A missing or unreadable file means no lists."""
    file_path = Path(path)
    if not file_path.is_file():
        return []
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
        return SpellingListsResponse.model_validate({"lists": data.get("lists", [])}).lists
    except (OSError, ValueError, AttributeError, ValidationError) as exc:
        logger.warning("spelling_lists_unreadable", path=str(file_path), error=str(exc))
        return []

