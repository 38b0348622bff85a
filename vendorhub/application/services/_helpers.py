"""Small validation helpers shared by the entity services."""

from __future__ import annotations

from typing import Any

from vendorhub.domain.exceptions import ValidationException


def clean_name(value: str | None, field: str = "name") -> str:
    """Strip value and reject an empty result."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationException(f"{field.replace('_', ' ').capitalize()} is required", field)
    return cleaned


def changed_fields(current: Any, changes: dict[str, Any]) -> dict[str, Any]:
    """Drop None values and values equal to the current DTO attribute."""
    return {
        name: value
        for name, value in changes.items()
        if value is not None and getattr(current, name, object()) != value
    }
