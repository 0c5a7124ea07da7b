"""Problem data model for quell.

Problems are diagnostics reported by lint rules. quell only reads the rule id
and the location; every other field is carried through untouched.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from quell.models.position import SourcePosition


class Severity(IntEnum):
    """Problem severity levels (0 = lowest)."""

    OFF = 0
    WARN = 1
    ERROR = 2


SEVERITY_MAX = Severity.ERROR

SEVERITY_STYLES: dict[int, str] = {
    Severity.ERROR: "red bold",
    Severity.WARN: "yellow",
    Severity.OFF: "dim",
}


class Problem(BaseModel):
    """A diagnostic reported against a source position.

    Unknown fields are kept as extra payload and survive serialization.

    Attributes:
        rule_id: Rule that reported the problem. None for problems that
            describe a directive rather than a rule.
        line: One-based line of the problem.
        column: One-based column of the problem.
        message: Human-readable description.
        severity: 0 (off), 1 (warn) or 2 (error).
        source: Source excerpt, if the producer attached one.
        node_type: Syntax node type, if the producer attached one.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    rule_id: Optional[str] = Field(default=None, alias="ruleId")
    line: int = Field(ge=1)
    column: int = Field(default=1, ge=1)
    message: Optional[str] = None
    severity: Optional[int] = None
    source: Optional[str] = None
    node_type: Optional[str] = Field(default=None, alias="nodeType")

    @property
    def position(self) -> SourcePosition:
        return SourcePosition(line=self.line, column=self.column)

    @property
    def is_error(self) -> bool:
        return self.severity is not None and self.severity >= Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, keeping extra payload.

        Only fields that were given are written, so a problem serializes
        back to the keys it was read from.
        """
        return self.model_dump(by_alias=True, exclude_unset=True)

    @classmethod
    def unused_directive(cls, rule_id: str | None, line: int, column: int) -> Problem:
        """Build the synthetic problem reported for an unused disable directive.

        Args:
            rule_id: Rule named by the directive, or None for a blanket
                directive.
            line: Line of the directive as written.
            column: Column of the directive as written.
        """
        if rule_id:
            message = (
                "Unused disable directive "
                f"(no problems were reported from '{rule_id}')."
            )
        else:
            message = "Unused disable directive (no problems were reported)."
        return cls(
            rule_id=None,
            message=message,
            line=line,
            column=column,
            severity=int(SEVERITY_MAX),
            source=None,
            node_type=None,
        )
