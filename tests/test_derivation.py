"""Tests for generator-based derivations and bind."""

from __future__ import annotations

from ruleparse.engine import (
    GET_STATE,
    HardFailure,
    ParseResult,
    ParseState,
    bind,
    derivation,
    expectation_error,
    failpoint,
    literal,
    repeat_exactly,
    repeat_zero_or_more,
    semantics,
    term,
)

digit = semantics(term(str.isdigit), int)


class TestDerivation:
    """Test derivation(steps)."""

    def test_products_flow_into_later_steps(self) -> None:
        """A later step can depend on an earlier product."""

        @derivation
        def counted():
            n = yield digit
            xs = yield repeat_exactly(n, literal("x"))
            return "".join(xs)

        result = counted(ParseState("3xxxx"))

        assert isinstance(result, ParseResult)
        assert result.value == "xxx"
        assert result.state.remainder == "x"

    def test_decline_consumes_nothing(self) -> None:
        """A declining step makes the derivation decline."""

        @derivation
        def pair():
            first = yield literal("a")
            second = yield literal("b")
            return first + second

        assert pair(ParseState("ac")) is None

    def test_get_state_returns_intermediate_state(self) -> None:
        """yield GET_STATE sends back the state between steps."""
        seen: list[int] = []

        @derivation
        def watch():
            yield literal("a")
            state = yield GET_STATE
            seen.append(state.pos)
            return state.pos

        result = watch(ParseState("ab"))

        assert isinstance(result, ParseResult)
        assert result.value == 1
        assert seen == [1]
        assert result.state.pos == 1

    def test_hard_failure_closes_generator(self) -> None:
        """A HardFailure ends the derivation; remaining steps never run."""
        reached: list[str] = []

        @derivation
        def closed():
            yield literal("[")
            try:
                yield failpoint(literal("]"), expectation_error('"]"'))
                reached.append("after")
            finally:
                reached.append("closed")

        result = closed(ParseState("[x"))

        assert isinstance(result, HardFailure)
        assert result.error.message == '"]" expected where "x" is'
        assert reached == ["closed"]

    def test_derivation_is_reusable(self) -> None:
        """Each application starts a fresh generator."""

        @derivation
        def letters():
            chars = yield repeat_zero_or_more(term(str.isalpha))
            return "".join(chars)

        first = letters(ParseState("ab1"))
        second = letters(ParseState("xyz"))

        assert isinstance(first, ParseResult)
        assert isinstance(second, ParseResult)
        assert (first.value, second.value) == ("ab", "xyz")

    def test_wraps_preserves_name(self) -> None:
        """The resulting rule keeps the generator function's name."""

        @derivation
        def named_rule():
            return (yield literal("a"))

        assert named_rule.__name__ == "named_rule"


class TestBind:
    """Test bind(subrule, continuation)."""

    def test_bind_threads_product(self) -> None:
        """Second rule is built from the first rule's product."""
        counted = bind(digit, lambda n: repeat_exactly(n, literal("x")))
        result = counted(ParseState("3xxxy"))

        assert isinstance(result, ParseResult)
        assert result.value == ("x", "x", "x")
        assert result.state.remainder == "y"

    def test_bind_first_decline(self) -> None:
        """Continuation is not called when the first rule declines."""
        called: list[object] = []

        def continuation(product: object):  # type: ignore[no-untyped-def]
            called.append(product)
            return literal("x")

        assert bind(digit, continuation)(ParseState("x")) is None
        assert called == []

    def test_bind_second_decline(self) -> None:
        """A declining continuation declines the whole rule."""
        counted = bind(digit, lambda n: repeat_exactly(n, literal("x")))

        assert counted(ParseState("3xx")) is None
