"""Tests for the directive/problem sweep."""

from quell.core.reconciler import (
    DirectiveReconciler,
    SuppressionState,
    apply_disable_directives,
)
from quell.models.directive import DirectiveKind, PrimitiveDirective, RawDirective
from quell.models.problem import Problem

DISABLE = DirectiveKind.DISABLE
ENABLE = DirectiveKind.ENABLE
DISABLE_LINE = DirectiveKind.DISABLE_LINE
DISABLE_NEXT_LINE = DirectiveKind.DISABLE_NEXT_LINE


def directive(kind, rule_id="all", line=1, column=1):
    return RawDirective(kind=kind, rule_id=rule_id, line=line, column=column)


def problem(rule_id, line, column=1, **payload):
    return Problem(rule_id=rule_id, line=line, column=column, **payload)


def unused_positions(problems):
    return [(p.line, p.column) for p in problems if p.rule_id is None]


class TestNoDirectives:
    """Tests for reconciliation without directives."""

    def test_identity(self):
        """Without directives every problem is reported in order."""
        problems = [problem("a", 1), problem("b", 2, 4), problem("a", 7)]

        result = apply_disable_directives([], problems)

        assert result == problems
        assert all(out is given for out, given in zip(result, problems))

    def test_identity_with_unused_reporting(self):
        """With no directives there is nothing unused to report."""
        problems = [problem("a", 1)]

        assert apply_disable_directives([], problems, report_unused_directives=True) == problems

    def test_no_problems(self):
        """No problems in, no problems out."""
        assert apply_disable_directives([directive(DISABLE)], []) == []

    def test_payload_passes_through(self):
        """Extra problem fields survive unchanged."""
        given = problem("a", 3, message="boom", severity=2, fatal=True, endLine=4)

        result = apply_disable_directives([], [given])

        assert result[0].to_dict()["fatal"] is True
        assert result[0].to_dict()["endLine"] == 4
        assert result[0].message == "boom"


class TestGlobalDirectives:
    """Tests for disable/enable directives that apply to all rules."""

    def test_disable_all_then_enable_all(self):
        """Only problems after the blanket enable are reported."""
        directives = [directive(DISABLE, line=1), directive(ENABLE, line=10)]
        problems = [problem("a", 2), problem("b", 15)]

        result = apply_disable_directives(directives, problems)

        assert result == [problems[1]]

    def test_disable_all_until_end(self):
        """A blanket disable with no enable lasts to the end of input."""
        directives = [directive(DISABLE, line=5)]
        problems = [problem("a", 4), problem("a", 5), problem("b", 500)]

        assert apply_disable_directives(directives, problems) == [problems[0]]

    def test_problem_without_rule_is_suppressed_globally(self):
        """A problem with no rule id is suppressed by a blanket disable."""
        directives = [directive(DISABLE, line=1)]

        assert apply_disable_directives(directives, [problem(None, 2)]) == []

    def test_enable_all_ends_per_rule_disables(self):
        """Enabling all rules also ends per-rule disables."""
        directives = [
            directive(DISABLE, rule_id="a", line=1),
            directive(ENABLE, line=5),
        ]
        problems = [problem("a", 3), problem("a", 6)]

        assert apply_disable_directives(directives, problems) == [problems[1]]


class TestPerRuleDirectives:
    """Tests for directives naming a single rule."""

    def test_disable_only_named_rule(self):
        """A rule disable leaves other rules reported."""
        directives = [directive(DISABLE, rule_id="a", line=1)]
        problems = [problem("a", 2), problem("b", 2)]

        assert apply_disable_directives(directives, problems) == [problems[1]]

    def test_disable_then_enable_rule(self):
        """A rule is reported again after its enable."""
        directives = [
            directive(DISABLE, rule_id="a", line=1),
            directive(ENABLE, rule_id="a", line=3),
        ]
        problems = [problem("a", 2), problem("a", 4)]

        assert apply_disable_directives(directives, problems) == [problems[1]]

    def test_enable_rule_under_global_disable(self):
        """A rule enabled inside a blanket disable is reported."""
        directives = [
            directive(DISABLE, line=1),
            directive(ENABLE, rule_id="no-undef", line=2),
        ]
        problems = [problem("no-undef", 3), problem("no-unused-vars", 3)]

        assert apply_disable_directives(directives, problems) == [problems[0]]

    def test_redisable_rule_under_global_disable(self):
        """Disabling a re-enabled rule under a blanket disable suppresses it again."""
        directives = [
            directive(DISABLE, line=1),
            directive(ENABLE, rule_id="a", line=2),
            directive(DISABLE, rule_id="a", line=4),
        ]
        problems = [problem("a", 3), problem("a", 5)]

        assert apply_disable_directives(directives, problems) == [problems[0]]

    def test_new_global_disable_clears_reenabled_rules(self):
        """A second blanket disable supersedes earlier rule re-enables."""
        directives = [
            directive(DISABLE, line=1),
            directive(ENABLE, rule_id="a", line=2),
            directive(DISABLE, line=5),
        ]
        problems = [problem("a", 3), problem("a", 6)]

        assert apply_disable_directives(directives, problems) == [problems[0]]

    def test_enable_without_disable_is_noop(self):
        """Enabling a rule that was never disabled changes nothing."""
        directives = [
            directive(ENABLE, rule_id="a", line=1),
            directive(DISABLE, rule_id="b", line=2),
        ]
        problems = [problem("a", 3), problem("b", 3)]

        assert apply_disable_directives(directives, problems) == [problems[0]]


class TestPositions:
    """Tests for how directive and problem positions interact."""

    def test_directive_at_problem_position_applies(self):
        """A directive at exactly a problem's position is already in effect."""
        directives = [directive(DISABLE, rule_id="a", line=4, column=7)]
        problems = [problem("a", 4, 6), problem("a", 4, 7)]

        assert apply_disable_directives(directives, problems) == [problems[0]]

    def test_enable_at_problem_position_applies(self):
        """An enable at a problem's position re-enables before classification."""
        directives = [
            directive(DISABLE, rule_id="a", line=1),
            directive(ENABLE, rule_id="a", line=4, column=7),
        ]
        problems = [problem("a", 4, 6), problem("a", 4, 7)]

        assert apply_disable_directives(directives, problems) == [problems[1]]

    def test_directives_in_any_order(self):
        """Raw directive order does not matter."""
        directives = [
            directive(ENABLE, rule_id="a", line=10),
            directive(DISABLE, rule_id="a", line=1),
        ]
        problems = [problem("a", 5), problem("a", 11)]

        assert apply_disable_directives(directives, problems) == [problems[1]]


class TestShorthands:
    """Tests for disable-line and disable-next-line."""

    def test_disable_line(self):
        """disable-line suppresses the rule on its own line only."""
        directives = [directive(DISABLE_LINE, rule_id="x", line=5, column=20)]
        problems = [
            problem("x", 4),
            problem("x", 5, 1),
            problem("x", 5, 30),
            problem("y", 5, 2),
            problem("x", 6),
        ]

        result = apply_disable_directives(directives, problems)

        assert result == [problems[0], problems[3], problems[4]]

    def test_disable_next_line(self):
        """disable-next-line suppresses the rule on the following line only."""
        directives = [directive(DISABLE_NEXT_LINE, rule_id="x", line=5, column=3)]
        problems = [problem("x", 5), problem("x", 6, 9), problem("x", 7)]

        result = apply_disable_directives(directives, problems)

        assert result == [problems[0], problems[2]]

    def test_disable_line_all_rules(self):
        """A blanket disable-line suppresses every rule on that line."""
        directives = [directive(DISABLE_LINE, line=2)]
        problems = [problem("a", 2), problem("b", 2, 5), problem("a", 3)]

        assert apply_disable_directives(directives, problems) == [problems[2]]

    def test_disable_line_ends_outer_rule_disable(self):
        """The enable half of a shorthand ends an outer disable of the same rule."""
        directives = [
            directive(DISABLE, rule_id="x", line=1),
            directive(DISABLE_LINE, rule_id="x", line=3),
        ]
        problems = [problem("x", 2), problem("x", 3), problem("x", 4)]

        assert apply_disable_directives(directives, problems) == [problems[2]]


class TestUnusedDirectives:
    """Tests for unused-directive reporting."""

    def test_unused_rule_directive_reported(self):
        """An unused rule disable yields one synthetic problem when asked."""
        directives = [directive(DISABLE, rule_id="y", line=1)]
        problems = [problem("x", 2)]

        result = apply_disable_directives(directives, problems, report_unused_directives=True)

        assert len(result) == 2
        synthetic = result[0]
        assert synthetic.rule_id is None
        assert (synthetic.line, synthetic.column) == (1, 1)
        assert synthetic.severity == 2
        assert synthetic.source is None
        assert synthetic.node_type is None
        assert synthetic.message == (
            "Unused disable directive (no problems were reported from 'y')."
        )

    def test_unused_not_reported_by_default(self):
        """Without the flag no synthetic problems appear."""
        directives = [directive(DISABLE, rule_id="y", line=1)]
        problems = [problem("x", 2)]

        assert apply_disable_directives(directives, problems) == problems

    def test_unused_blanket_directive_message(self):
        """An unused blanket disable has the rule-less message."""
        result = apply_disable_directives(
            [directive(DISABLE, line=3, column=2)], [], report_unused_directives=True
        )

        assert len(result) == 1
        assert result[0].message == "Unused disable directive (no problems were reported)."
        assert (result[0].line, result[0].column) == (3, 2)

    def test_unused_shorthand_reported_where_written(self):
        """Shorthand directives are reported where they were written."""
        directives = [directive(DISABLE_NEXT_LINE, rule_id="x", line=5, column=9)]

        result = apply_disable_directives(directives, [], report_unused_directives=True)

        assert unused_positions(result) == [(5, 9)]

    def test_used_directive_not_reported(self):
        """A directive that suppressed something is not reported."""
        directives = [directive(DISABLE_LINE, rule_id="x", line=5)]
        problems = [problem("x", 5)]

        assert apply_disable_directives(directives, problems, report_unused_directives=True) == []

    def test_enable_directives_never_reported(self):
        """Only disable directives can be unused."""
        directives = [directive(ENABLE, rule_id="x", line=5)]

        assert apply_disable_directives(directives, [], report_unused_directives=True) == []

    def test_redisable_overwrites_credit(self):
        """The later of two disables for a rule gets the credit."""
        directives = [
            directive(DISABLE, rule_id="x", line=1),
            directive(DISABLE, rule_id="x", line=2),
        ]
        problems = [problem("x", 3)]

        result = apply_disable_directives(directives, problems, report_unused_directives=True)

        assert unused_positions(result) == [(1, 1)]

    def test_global_disable_credited(self):
        """A blanket disable that suppresses a problem is not reported."""
        directives = [
            directive(DISABLE, line=1),
            directive(DISABLE, rule_id="b", line=1, column=5),
        ]
        problems = [problem("a", 2)]

        result = apply_disable_directives(directives, problems, report_unused_directives=True)

        assert unused_positions(result) == [(1, 5)]

    def test_rule_disable_takes_credit_over_global(self):
        """A rule disable under a blanket disable gets the credit for its rule."""
        directives = [
            directive(DISABLE, line=1),
            directive(DISABLE, rule_id="a", line=2),
        ]
        problems = [problem("a", 3)]

        result = apply_disable_directives(directives, problems, report_unused_directives=True)

        assert unused_positions(result) == [(1, 1)]

    def test_synthetic_problems_merged_in_position_order(self):
        """Synthetic problems are interleaved with reported ones by position."""
        directives = [
            directive(DISABLE, rule_id="unused-a", line=3),
            directive(DISABLE, rule_id="unused-b", line=8),
        ]
        problems = [problem("x", 1), problem("x", 5), problem("x", 10)]

        result = apply_disable_directives(directives, problems, report_unused_directives=True)

        assert [p.line for p in result] == [1, 3, 5, 8, 10]


class TestDirectiveReconciler:
    """Tests for the reconciler class and its result."""

    def test_result_lists(self):
        """The result separates reported and suppressed problems."""
        directives = [
            directive(DISABLE, rule_id="a", line=1),
            directive(DISABLE, rule_id="z", line=1),
        ]
        problems = [problem("a", 2), problem("b", 3)]

        result = DirectiveReconciler().reconcile(directives, problems)

        assert result.problems == [problems[1]]
        assert result.suppressed == [problems[0]]
        assert [d.rule_id for d in result.unused_directives] == ["z"]

    def test_stats(self):
        """Stats count input problems, not synthetic ones."""
        directives = [
            directive(DISABLE, rule_id="a", line=1),
            directive(DISABLE, rule_id="z", line=1),
        ]
        problems = [problem("a", 2), problem("b", 3), problem("c", 4)]

        reconciler = DirectiveReconciler(report_unused_directives=True)
        stats = reconciler.reconcile(directives, problems).stats()

        assert stats.total_problems == 3
        assert stats.reported == 2
        assert stats.suppressed == 1
        assert stats.unused_directives == 1

    def test_calls_are_independent(self):
        """State from one call does not leak into the next."""
        reconciler = DirectiveReconciler()
        reconciler.reconcile([directive(DISABLE, line=1)], [problem("a", 2)])

        result = reconciler.reconcile([], [problem("a", 2)])

        assert len(result.problems) == 1

    def test_deterministic(self):
        """The same input always gives the same output."""
        directives = [
            directive(DISABLE, line=1),
            directive(ENABLE, rule_id="b", line=2),
            directive(DISABLE_LINE, rule_id="b", line=4),
            directive(DISABLE, rule_id="q", line=6),
        ]
        problems = [problem(r, line) for line in range(1, 9) for r in ("a", "b")]
        reconciler = DirectiveReconciler(report_unused_directives=True)

        first = [p.to_dict() for p in reconciler.reconcile(directives, problems).problems]
        second = [p.to_dict() for p in reconciler.reconcile(directives, problems).problems]

        assert first == second

    def test_report_unused_property(self):
        """The flag is exposed read-only."""
        assert DirectiveReconciler(report_unused_directives=True).report_unused_directives


class TestSuppressionState:
    """Tests for the suppression state machine on its own."""

    def primitive(self, kind, rule_id, index):
        return PrimitiveDirective(
            kind=kind, rule_id=rule_id, line=1, column=1, origin=index, index=index
        )

    def test_starts_empty(self):
        """A fresh state suppresses nothing."""
        state = SuppressionState()

        assert state.suppressor_for("a") is None

    def test_rule_disable_and_enable(self):
        """Per-rule disables are tracked by rule id."""
        state = SuppressionState()
        disable = self.primitive("disable", "a", 0)

        state.apply(disable)
        assert state.suppressor_for("a") is disable
        assert state.suppressor_for("b") is None

        state.apply(self.primitive("enable", "a", 1))
        assert state.suppressor_for("a") is None

    def test_reenable_and_rule_map_never_overlap(self):
        """A rule is never both disabled and re-enabled at once."""
        state = SuppressionState()
        state.apply(self.primitive("disable", "all", 0))
        state.apply(self.primitive("enable", "a", 1))
        assert "a" in state.re_enabled_under_global
        assert "a" not in state.per_rule_disable

        state.apply(self.primitive("disable", "a", 2))
        assert "a" not in state.re_enabled_under_global
        assert "a" in state.per_rule_disable

    def test_enable_all_resets(self):
        """Enabling all rules resets every suppression structure."""
        state = SuppressionState()
        state.apply(self.primitive("disable", "all", 0))
        state.apply(self.primitive("enable", "a", 1))
        state.apply(self.primitive("disable", "b", 2))
        state.apply(self.primitive("enable", "all", 3))

        assert state.global_disable is None
        assert state.per_rule_disable == {}
        assert state.re_enabled_under_global == set()
