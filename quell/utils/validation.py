"""Helpers for turning pydantic validation errors into readable messages."""

from pydantic import ValidationError


def summarize_validation_error(error: ValidationError) -> str:
    """Condense a pydantic ValidationError into one line.

    Each failure is written as ``dotted.location: message`` and failures are
    joined with "; ".
    """
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)
