"""Data models for quell."""

from quell.models.directive import (
    ALL_RULES,
    DirectiveKind,
    PrimitiveDirective,
    RawDirective,
)
from quell.models.document import LintDocument
from quell.models.position import SourcePosition, location_key
from quell.models.problem import SEVERITY_MAX, SEVERITY_STYLES, Problem, Severity

__all__ = [
    "ALL_RULES",
    "DirectiveKind",
    "LintDocument",
    "PrimitiveDirective",
    "Problem",
    "RawDirective",
    "SEVERITY_MAX",
    "SEVERITY_STYLES",
    "Severity",
    "SourcePosition",
    "location_key",
]
