"""Shared validation utilities for to_dict / from_dict round-trips."""

from collections.abc import Mapping


def as_str_object_dict(value: object, *, field_name: str) -> dict[str, object]:
    """Validate and normalize a mapping value into ``dict[str, object]``."""
    if not isinstance(value, Mapping):
        msg = f"{field_name} must be a mapping."
        raise TypeError(msg)
    return {str(key): item for key, item in value.items()}


def optional_string(value: object, *, field_name: str) -> str | None:
    """Validate an optional string field."""
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{field_name} must be a string or None."
        raise TypeError(msg)
    return value


def require_string(value: object, *, field_name: str) -> str:
    """Validate a required non-empty string field."""
    if not isinstance(value, str) or not value:
        msg = f"{field_name} must be a non-empty string."
        raise TypeError(msg)
    return value
