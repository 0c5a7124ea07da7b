"""Sweep reconciliation of problems against disable/enable directives.

This module provides:
- SuppressionState: The per-call suppression state machine
- DirectiveReconciler: Runs the sweep and collects statistics
- apply_disable_directives: Function-call entry point returning surfaced problems

The sweep walks problems in position order and, before classifying each one,
applies every primitive directive at or before its position. A directive at
exactly a problem's position is therefore already in effect for it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from quell.core.expander import expand_directives
from quell.models.directive import PrimitiveDirective, RawDirective
from quell.models.position import location_key
from quell.models.problem import Problem

logger = logging.getLogger(__name__)


@dataclass
class SuppressionState:
    """Which rules are suppressed at the current sweep position.

    Attributes:
        global_disable: The active "disable all" primitive, if any.
        per_rule_disable: Rule id to the primitive that disabled it. Under a
            global disable these are rules re-disabled after a re-enable.
        re_enabled_under_global: Rules enabled again while a global disable
            is active. Only meaningful when global_disable is set.
        used: Indices of primitives credited with suppressing a problem.
    """

    global_disable: Optional[PrimitiveDirective] = None
    per_rule_disable: dict[str, PrimitiveDirective] = field(default_factory=dict)
    re_enabled_under_global: set[str] = field(default_factory=set)
    used: set[int] = field(default_factory=set)

    def apply(self, directive: PrimitiveDirective) -> None:
        """Apply one disable or enable primitive."""
        rule_id = directive.rule_id

        if directive.kind == "disable":
            if directive.applies_to_all:
                self.global_disable = directive
                self.per_rule_disable.clear()
                self.re_enabled_under_global.clear()
            else:
                if self.global_disable is not None:
                    self.re_enabled_under_global.discard(rule_id)
                self.per_rule_disable[rule_id] = directive
        else:
            if directive.applies_to_all:
                self.global_disable = None
                self.per_rule_disable.clear()
                self.re_enabled_under_global.clear()
            else:
                if self.global_disable is not None:
                    self.re_enabled_under_global.add(rule_id)
                self.per_rule_disable.pop(rule_id, None)

    def suppressor_for(self, rule_id: Optional[str]) -> Optional[PrimitiveDirective]:
        """Return the primitive suppressing rule_id right now, or None."""
        if rule_id is not None and rule_id in self.per_rule_disable:
            return self.per_rule_disable[rule_id]
        if self.global_disable is not None and rule_id not in self.re_enabled_under_global:
            return self.global_disable
        return None


@dataclass
class ReconcileStats:
    """Counts describing one reconciliation.

    Attributes:
        total_problems: Number of input problems.
        reported: Number of input problems that were not suppressed.
        suppressed: Number of input problems that were suppressed.
        unused_directives: Number of disable primitives that suppressed nothing.
    """

    total_problems: int
    reported: int
    suppressed: int
    unused_directives: int


@dataclass
class ReconcileResult:
    """Outcome of a reconciliation.

    Attributes:
        problems: Surfaced problems in position order, including synthetic
            unused-directive problems when those were requested.
        suppressed: Input problems hidden by a directive, in position order.
        unused_directives: Disable primitives credited with nothing.
        total_problems: Number of input problems.
    """

    problems: list[Problem] = field(default_factory=list)
    suppressed: list[Problem] = field(default_factory=list)
    unused_directives: list[PrimitiveDirective] = field(default_factory=list)
    total_problems: int = 0

    def stats(self) -> ReconcileStats:
        return ReconcileStats(
            total_problems=self.total_problems,
            reported=self.total_problems - len(self.suppressed),
            suppressed=len(self.suppressed),
            unused_directives=len(self.unused_directives),
        )


class DirectiveReconciler:
    """Filters problems through the disable/enable directives of one source.

    A reconciler holds no state between calls; every call to ``reconcile``
    starts a fresh SuppressionState.

    Example usage:
        reconciler = DirectiveReconciler(report_unused_directives=True)
        result = reconciler.reconcile(directives, problems)
        for problem in result.problems:
            print(problem.line, problem.message)
    """

    def __init__(self, report_unused_directives: bool = False):
        """Initialize the reconciler.

        Args:
            report_unused_directives: If True, add a synthetic problem for
                every disable directive that suppressed nothing.
        """
        self._report_unused = report_unused_directives

    @property
    def report_unused_directives(self) -> bool:
        return self._report_unused

    def reconcile(
        self,
        directives: Sequence[RawDirective],
        problems: Sequence[Problem],
    ) -> ReconcileResult:
        """Run the sweep.

        Args:
            directives: Raw directives in any order.
            problems: Problems sorted by position. Sortedness is not checked.

        Returns:
            ReconcileResult with surfaced and suppressed problems.

        Raises:
            UnrecognizedDirectiveError: If a directive has an unknown kind.
        """
        primitives = expand_directives(directives)
        state = SuppressionState()
        result = ReconcileResult(total_problems=len(problems))
        next_directive = 0

        for problem in problems:
            problem_key = location_key(problem)
            while (
                next_directive < len(primitives)
                and location_key(primitives[next_directive]) <= problem_key
            ):
                state.apply(primitives[next_directive])
                next_directive += 1

            suppressor = state.suppressor_for(problem.rule_id)
            if suppressor is None:
                result.problems.append(problem)
            else:
                state.used.add(suppressor.index)
                result.suppressed.append(problem)

        result.unused_directives = [
            primitive for primitive in primitives
            if primitive.kind == "disable" and primitive.index not in state.used
        ]

        if self._report_unused:
            unused_problems = [
                self._unused_problem(primitive, directives)
                for primitive in result.unused_directives
            ]
            result.problems = sorted(result.problems + unused_problems, key=location_key)

        logger.debug(
            "Reconciled %d problems against %d directives: %d reported, %d suppressed, %d unused",
            len(problems),
            len(primitives),
            len(result.problems),
            len(result.suppressed),
            len(result.unused_directives),
        )
        return result

    def _unused_problem(
        self,
        primitive: PrimitiveDirective,
        directives: Sequence[RawDirective],
    ) -> Problem:
        """Synthesize the problem for an unused primitive.

        The problem is placed at the directive as written, not at the
        boundary the expander derived from it.
        """
        origin = directives[primitive.origin]
        rule_id = None if primitive.applies_to_all else primitive.rule_id
        return Problem.unused_directive(rule_id, origin.line, origin.column)


def apply_disable_directives(
    directives: Sequence[RawDirective],
    problems: Sequence[Problem],
    report_unused_directives: bool = False,
) -> list[Problem]:
    """Return the problems that survive the given directives.

    Args:
        directives: Raw directives in any order.
        problems: Problems sorted by position.
        report_unused_directives: If True, include a synthetic problem for
            every disable directive that suppressed nothing.

    Returns:
        Surfaced problems sorted by position.
    """
    reconciler = DirectiveReconciler(report_unused_directives=report_unused_directives)
    return reconciler.reconcile(directives, problems).problems
