"""SourcePosition model and location ordering helpers."""

from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class Located(Protocol):
    """Anything carrying a one-based line and column."""

    line: int
    column: int


class SourcePosition(BaseModel):
    """A one-based location in a source text.

    Positions are totally ordered by line, then column.
    """

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(ge=1)

    def __lt__(self, other: SourcePosition) -> bool:
        return location_key(self) < location_key(other)

    def __le__(self, other: SourcePosition) -> bool:
        return location_key(self) <= location_key(other)


def location_key(item: Located) -> tuple[int, int]:
    """Sort key for directives, problems and positions."""
    return (item.line, item.column)
