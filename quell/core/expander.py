"""Directive expansion for quell.

Shorthand directives (disable-line, disable-next-line) are rewritten into a
disable/enable pair bracketing exactly one line, so the reconciler only has
to understand the two primitive kinds.
"""

from __future__ import annotations

from collections.abc import Sequence

from quell.models.directive import DirectiveKind, PrimitiveDirective, RawDirective
from quell.models.position import location_key


class UnrecognizedDirectiveError(TypeError):
    """Raised for a directive kind the expander does not know.

    This points at a bug in whatever produced the directive records, so it
    is never recovered from.

    Attributes:
        kind: The offending kind value.
        index: Index of the directive in the input list.
    """

    def __init__(self, kind: object, index: int):
        self.kind = kind
        self.index = index
        name = kind.value if isinstance(kind, DirectiveKind) else kind
        super().__init__(f"Unrecognized directive type '{name}' (directive {index + 1})")


def _expand_one(directive: RawDirective, origin: int) -> list[tuple[str, int, int]]:
    """Return (kind, line, column) boundaries for one raw directive."""
    kind = directive.kind
    line = directive.line

    if kind == DirectiveKind.DISABLE:
        return [("disable", line, directive.column)]
    if kind == DirectiveKind.ENABLE:
        return [("enable", line, directive.column)]
    if kind == DirectiveKind.DISABLE_LINE:
        return [("disable", line, 1), ("enable", line + 1, 1)]
    if kind == DirectiveKind.DISABLE_NEXT_LINE:
        return [("disable", line + 1, 1), ("enable", line + 2, 1)]

    raise UnrecognizedDirectiveError(kind, origin)


def expand_directives(directives: Sequence[RawDirective]) -> list[PrimitiveDirective]:
    """Expand raw directives into position-ordered disable/enable primitives.

    Each primitive records the index of the raw directive it came from in
    ``origin``; both halves of a line-scoped shorthand share one origin.
    Ties in position keep expansion order.

    Args:
        directives: Raw directives in any order.

    Returns:
        Primitive directives sorted by position, each with its ``index``
        set to its slot in the returned list.

    Raises:
        UnrecognizedDirectiveError: If a directive has an unknown kind.
    """
    expanded: list[PrimitiveDirective] = []
    for origin, directive in enumerate(directives):
        for kind, line, column in _expand_one(directive, origin):
            expanded.append(
                PrimitiveDirective(
                    kind=kind,
                    rule_id=directive.rule_id,
                    line=line,
                    column=column,
                    origin=origin,
                )
            )

    # list.sort is stable, so same-position primitives keep expansion order
    expanded.sort(key=location_key)

    return [
        primitive.model_copy(update={"index": index})
        for index, primitive in enumerate(expanded)
    ]
