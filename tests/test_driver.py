"""Tests for run_rule outcome classification and rule_match."""

from __future__ import annotations

import pytest

from ruleparse import RuleSyntaxError
from ruleparse.diagnostics import DiagnosticCode
from ruleparse.engine import (
    Escalated,
    InvalidInput,
    LeftoverInput,
    ParseState,
    Success,
    expectation_error,
    failpoint,
    literal,
    rule_match,
    run_rule,
    sequence,
)

ab = sequence(literal("a"), literal("b"))
strict_ab = sequence(literal("a"), failpoint(literal("b"), expectation_error('"b"')))


# ============================================================================
# RUN_RULE
# ============================================================================


class TestRunRule:
    """Test the four-way classification."""

    def test_success(self) -> None:
        """Full consumption is Success."""
        outcome = run_rule(ab, ParseState("ab"))

        assert outcome == Success(("a", "b"))
        assert outcome.is_success
        assert outcome.unwrap() == ("a", "b")

    def test_leftover(self) -> None:
        """A prefix match is LeftoverInput with the final state."""
        outcome = run_rule(ab, ParseState("abc"))

        assert isinstance(outcome, LeftoverInput)
        assert outcome.value == ("a", "b")
        assert outcome.state.remainder == "c"
        assert not outcome.is_success

    def test_invalid(self) -> None:
        """A decline is InvalidInput with the initial state."""
        initial = ParseState("xy")
        outcome = run_rule(ab, initial)

        assert isinstance(outcome, InvalidInput)
        assert outcome.state is initial

    def test_escalated(self) -> None:
        """A HardFailure is Escalated with its ParseError."""
        outcome = run_rule(strict_ab, ParseState("ax"))

        assert isinstance(outcome, Escalated)
        assert outcome.error.message == '"b" expected where "x" is'

    def test_empty_input_success(self) -> None:
        """A rule matching nothing on empty input succeeds."""
        assert run_rule(sequence(), ParseState("")) == Success(())

    def test_empty_input_invalid(self) -> None:
        """A rule requiring a token declines on empty input."""
        assert isinstance(run_rule(ab, ParseState("")), InvalidInput)


# ============================================================================
# DIAGNOSTICS AND UNWRAP
# ============================================================================


class TestOutcomeDiagnostics:
    """Test outcome diagnostics and unwrap()."""

    def test_invalid_diagnostic(self) -> None:
        """InvalidInput reports the rejected input."""
        diagnostic = run_rule(ab, ParseState("xy")).diagnostic

        assert diagnostic.code == DiagnosticCode.INVALID_INPUT
        assert diagnostic.message == 'invalid document "xy"'

    def test_leftover_diagnostic(self) -> None:
        """LeftoverInput reports the unconsumed suffix."""
        diagnostic = run_rule(ab, ParseState("abcd")).diagnostic

        assert diagnostic.code == DiagnosticCode.LEFTOVER_INPUT
        assert diagnostic.message == 'leftover data after a valid node "cd"'
        assert diagnostic.position == 2

    def test_invalid_at_end_of_input(self) -> None:
        """Empty input is described as the end of input."""
        diagnostic = run_rule(ab, ParseState("")).diagnostic

        assert diagnostic.message == "invalid document the end of input"

    def test_unwrap_raises_syntax_error(self) -> None:
        """Non-success outcomes raise RuleSyntaxError carrying a diagnostic."""
        with pytest.raises(RuleSyntaxError) as exc_info:
            run_rule(ab, ParseState("abc")).unwrap()

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.LEFTOVER_INPUT
        assert exc_info.value.error is None

    def test_escalated_unwrap_keeps_error(self) -> None:
        """Escalated outcomes attach the ParseError to the exception."""
        with pytest.raises(RuleSyntaxError) as exc_info:
            run_rule(strict_ab, ParseState("a")).unwrap()

        assert exc_info.value.error is not None
        assert exc_info.value.error.found is None
        assert "expected where the end of input is" in str(exc_info.value)


# ============================================================================
# RULE_MATCH
# ============================================================================


class TestRuleMatch:
    """Test rule_match with and without handlers."""

    def test_returns_product(self) -> None:
        """Success returns the product."""
        assert rule_match(ab, ParseState("ab")) == ("a", "b")

    def test_on_invalid_handler(self) -> None:
        """on_invalid receives the initial state."""
        result = rule_match(ab, ParseState("zz"), on_invalid=lambda state: state.pos)

        assert result == 0

    def test_on_leftover_handler(self) -> None:
        """on_leftover receives the product and final state."""
        result = rule_match(
            ab,
            ParseState("abc"),
            on_leftover=lambda value, state: (value, state.remainder),
        )

        assert result == (("a", "b"), "c")

    def test_missing_handler_raises(self) -> None:
        """Without a handler, invalid input raises."""
        with pytest.raises(RuleSyntaxError, match="invalid document"):
            rule_match(ab, ParseState("zz"), on_leftover=lambda value, state: value)

    def test_escalated_always_raises(self) -> None:
        """Escalated failures raise even when handlers are given."""
        with pytest.raises(RuleSyntaxError):
            rule_match(
                strict_ab,
                ParseState("ax"),
                on_invalid=lambda state: None,
                on_leftover=lambda value, state: None,
            )
