"""Input validation helpers."""

from __future__ import annotations

from datetime import date
from typing import Optional


def require_fields(data: dict, *fields: str) -> None:
    for field in fields:
        if field not in data or data[field] in (None, ""):
            raise ValueError(f"Missing required field: {field}")


def clean_text(value) -> Optional[str]:
    """Strip form input; empty strings become None."""
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None


def parse_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValueError("invalid_date") from exc


def form_errors(exc) -> list[str]:
    """Flatten a pydantic ValidationError into readable messages."""
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", "invalid value")).removeprefix("Value error, ")
        field = ".".join(str(part) for part in error.get("loc", ()))
        if field:
            message = f"{field.replace('_', ' ').capitalize()}: {message}"
        messages.append(message)
    return messages
