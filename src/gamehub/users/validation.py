"""Username format rules."""

import re

from gamehub.errors import ValidationFailed

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{3,20}$")
USERNAME_FORMAT_MESSAGE = (
    "Username must be 3-20 characters and contain only letters, numbers, underscores, or hyphens"
)


def is_valid_username(value: str | None) -> bool:
    return value is not None and USERNAME_PATTERN.fullmatch(value) is not None


def validate_username(value: str | None) -> str:
    """Return ``value`` unchanged or raise ``ValidationFailed``. Never trims or truncates."""
    if not is_valid_username(value):
        raise ValidationFailed(USERNAME_FORMAT_MESSAGE)
    return value  # type: ignore[return-value]


def normalize_username(value: str) -> str:
    """Key used for case-insensitive uniqueness."""
    return value.lower()
