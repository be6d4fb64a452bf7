"""Top-level driver: run a root rule and classify the outcome.

A root rule applied to an initial state ends in exactly one of four ways:

- ``Success``: it matched and consumed every token
- ``InvalidInput``: it declined; carries the initial state
- ``LeftoverInput``: it matched a prefix; carries the final state
- ``Escalated``: it returned a HardFailure; carries the ParseError

The driver only classifies. ``Outcome.unwrap()`` and ``rule_match()`` are the
caller-side helpers that turn non-success outcomes into exceptions.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NoReturn

from ruleparse.diagnostics import Diagnostic, ErrorTemplate, RuleSyntaxError
from ruleparse.engine.state import HardFailure, ParseError, ParseState, Rule

__all__ = [
    "Escalated",
    "InvalidInput",
    "LeftoverInput",
    "Outcome",
    "Success",
    "rule_match",
    "run_rule",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Success[P]:
    """Root rule matched the entire input."""

    value: P

    @property
    def is_success(self) -> bool:
        return True

    def unwrap(self) -> P:
        return self.value


@dataclass(frozen=True, slots=True)
class InvalidInput:
    """Root rule did not match at all.

    Attributes:
        state: The initial state the root rule rejected
    """

    state: ParseState[Any, Any]

    @property
    def is_success(self) -> bool:
        return False

    @property
    def diagnostic(self) -> Diagnostic:
        return ErrorTemplate.invalid_input(
            self.state.preview(), span=self.state.span(), position=self.state.pos
        )

    def unwrap(self) -> NoReturn:
        raise RuleSyntaxError(self.diagnostic)


@dataclass(frozen=True, slots=True)
class LeftoverInput[P]:
    """Root rule matched, but tokens remain after the match.

    Attributes:
        value: Product of the valid prefix
        state: Final state; its remainder is the unconsumed suffix
    """

    value: P
    state: ParseState[Any, Any]

    @property
    def is_success(self) -> bool:
        return False

    @property
    def diagnostic(self) -> Diagnostic:
        return ErrorTemplate.leftover_input(
            self.state.preview(), span=self.state.span(), position=self.state.pos
        )

    def unwrap(self) -> NoReturn:
        raise RuleSyntaxError(self.diagnostic)


@dataclass(frozen=True, slots=True)
class Escalated:
    """Root rule returned a HardFailure.

    Attributes:
        error: The escalated ParseError
    """

    error: ParseError

    @property
    def is_success(self) -> bool:
        return False

    @property
    def diagnostic(self) -> Diagnostic:
        return self.error.to_diagnostic()

    def unwrap(self) -> NoReturn:
        raise RuleSyntaxError(self.diagnostic, error=self.error)


type Outcome[P] = Success[P] | InvalidInput | LeftoverInput[P] | Escalated


def run_rule[P](rule: Rule[P], initial_state: ParseState[Any, Any]) -> Outcome[P]:
    """Apply ``rule`` to ``initial_state`` and classify the result.

    Example:
        >>> ab = sequence(literal("a"), literal("b"))
        >>> run_rule(ab, ParseState("ab"))
        Success(value=('a', 'b'))
        >>> run_rule(ab, ParseState("abc")).state.remainder
        'c'
    """
    result = rule(initial_state)

    if result is None:
        logger.debug("Root rule declined at position %d", initial_state.pos)
        return InvalidInput(initial_state)

    if isinstance(result, HardFailure):
        logger.debug("Root rule escalated: %s", result.error.format_error())
        return Escalated(result.error)

    final_state = result.state
    if not final_state.is_eof:
        logger.debug(
            "Root rule matched up to position %d of %d",
            final_state.pos,
            len(final_state.tokens),
        )
        return LeftoverInput(result.value, final_state)

    logger.debug("Root rule matched all %d tokens", len(final_state.tokens))
    return Success(result.value)


def rule_match[P, R](
    rule: Rule[P],
    initial_state: ParseState[Any, Any],
    *,
    on_invalid: Callable[[ParseState[Any, Any]], R] | None = None,
    on_leftover: Callable[[P, ParseState[Any, Any]], R] | None = None,
) -> P | R:
    """Run ``rule`` and return its product, delegating failures to handlers.

    Args:
        rule: Root rule
        initial_state: State to start from
        on_invalid: Called with the initial state when the rule declines
        on_leftover: Called with the product and final state when tokens remain

    Returns:
        The product on success, otherwise the handler's return value.

    Raises:
        RuleSyntaxError: On escalated failures, and for invalid or leftover
            input when no handler is given.
    """
    outcome = run_rule(rule, initial_state)
    match outcome:
        case Success(value=value):
            return value
        case InvalidInput(state=state) if on_invalid is not None:
            return on_invalid(state)
        case LeftoverInput(value=value, state=state) if on_leftover is not None:
            return on_leftover(value, state)
        case _:
            return outcome.unwrap()
