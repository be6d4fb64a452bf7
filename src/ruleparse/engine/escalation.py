"""Escalation: turning a decline into a hard, propagating failure.

Inside a grammar, a decline usually means "try something else". After an
opening bracket, though, a missing closing bracket cannot be fixed by any
other alternative. ``failpoint`` marks such positions. A decline there
becomes a ``HardFailure`` that no enclosing choice or repetition intercepts.
"""

from collections.abc import Callable, Sequence
from typing import Any

from ruleparse.diagnostics import ErrorTemplate
from ruleparse.engine.state import (
    HardFailure,
    ParseError,
    ParseState,
    Rule,
    RuleResult,
)

__all__ = ["ErrorFactory", "escalate", "expectation_error", "failpoint"]

type ErrorFactory = Callable[[Sequence[Any], ParseState[Any, Any]], ParseError]
"""Builds the error for a failed mandatory rule from (remainder, state)."""


def failpoint[P](subrule: Rule[P], error_fn: ErrorFactory) -> Rule[P]:
    """Require ``subrule`` to match; escalate with ``error_fn`` otherwise.

    Matches and hard failures pass through unchanged. A decline becomes
    ``HardFailure(error_fn(state.remainder, state))``. ``state`` is the state
    the failpoint was applied to.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[P]:
        result = subrule(state)
        if result is None:
            return HardFailure(error_fn(state.remainder, state))
        return result

    return rule


def escalate(error_fn: ErrorFactory) -> Rule[Any]:
    """Rule that always hard-fails with ``error_fn``'s error.

    Grammars use it inside derivations to reject semantically invalid input
    (e.g. a nesting limit) at the current state.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[Any]:
        return HardFailure(error_fn(state.remainder, state))

    return rule


def _render_token(token: object) -> str:
    return token if isinstance(token, str) else repr(token)


def expectation_error(expectation: str) -> ErrorFactory:
    """Error factory reporting ``expectation`` against the next token.

    The message reads ``<expectation> expected where "<token>" is``, or
    ``... where the end of input is`` when nothing remains. Location comes
    from the state (context line/column, or the token offset).

    Example:
        >>> closing = failpoint(literal("]"), expectation_error('an array is unclosed; "]"'))
        >>> closing(ParseState("x")).error.message
        'an array is unclosed; "]" expected where "x" is'
    """

    def error_fn(remainder: Sequence[Any], state: ParseState[Any, Any]) -> ParseError:
        found = _render_token(remainder[0]) if len(remainder) > 0 else None
        diagnostic = ErrorTemplate.expectation_failed(
            expectation, found, span=state.span(), position=state.pos
        )
        return ParseError.from_diagnostic(diagnostic, state)

    return error_fn
