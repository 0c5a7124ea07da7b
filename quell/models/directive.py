"""Directive data models for quell.

Raw directives are produced by whatever parses comment text in the linted
source; quell never sees the comments themselves. Primitive directives are
the expanded disable/enable boundaries the reconciler sweeps over.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quell.models.position import SourcePosition

# Rule id standing for "every rule"
ALL_RULES = "all"


class DirectiveKind(str, Enum):
    """Kinds of inline directive, keyed by their wire names."""

    DISABLE = "disable"
    ENABLE = "enable"
    DISABLE_LINE = "disable-line"
    DISABLE_NEXT_LINE = "disable-next-line"


class RawDirective(BaseModel):
    """A directive as written in the source.

    Attributes:
        kind: The directive kind.
        rule_id: Rule the directive applies to, or "all". A null rule id
            in input data means "all".
        line: One-based line of the directive comment.
        column: One-based column of the directive comment.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: DirectiveKind = Field(alias="type")
    rule_id: str = Field(default=ALL_RULES, alias="ruleId")
    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)

    @field_validator("rule_id", mode="before")
    @classmethod
    def normalize_rule_id(cls, v: Optional[str]) -> str:
        """Map a missing rule id onto ALL_RULES."""
        if v is None:
            return ALL_RULES
        return v

    @property
    def position(self) -> SourcePosition:
        return SourcePosition(line=self.line, column=self.column)

    @property
    def applies_to_all(self) -> bool:
        return self.rule_id == ALL_RULES


class PrimitiveDirective(BaseModel):
    """A disable or enable boundary derived from a RawDirective.

    Attributes:
        kind: Either "disable" or "enable".
        rule_id: Rule the boundary applies to, or "all".
        line: One-based line where the boundary takes effect.
        column: One-based column where the boundary takes effect.
        origin: Index of the originating directive in the raw directive list.
        index: Slot of this primitive in the expanded list. Used-directive
            credit is tracked by this index.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["disable", "enable"]
    rule_id: str
    line: int
    column: int
    origin: int
    index: int = -1

    @property
    def position(self) -> SourcePosition:
        return SourcePosition(line=self.line, column=self.column)

    @property
    def applies_to_all(self) -> bool:
        return self.rule_id == ALL_RULES
