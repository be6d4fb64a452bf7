"""Derivation: data-dependent, multi-step rule composition.

``sequence`` fixes its sub-rules when it is built. A derivation picks each
step while parsing, so a later step can depend on what earlier steps
produced.

A derivation is written as a generator function. Each ``yield rule`` runs
``rule`` from the current state and sends its product back into the
generator. The generator's ``return`` value becomes the derivation's
product::

    @derivation
    def string_literal():
        yield quote
        contents = yield repeat_zero_or_more(string_char)
        yield failpoint(quote, expectation_error("closing quote"))
        return "".join(contents)

``yield GET_STATE`` sends back the intermediate state without consuming
anything, for steps that depend on position or context.
"""

from collections.abc import Callable, Generator
from functools import wraps
from typing import Any, Final

from ruleparse.engine.state import ParseResult, ParseState, Rule, RuleResult

__all__ = ["GET_STATE", "bind", "derivation"]


class _StateRequest:
    """Marker yielded by a derivation to receive the current ParseState."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "GET_STATE"


GET_STATE: Final = _StateRequest()

type DerivationSteps[P] = Callable[[], Generator[Rule[Any] | _StateRequest, Any, P]]


def derivation[P](steps: DerivationSteps[P]) -> Rule[P]:
    """Turn a generator function of rule steps into a single rule.

    If any step declines or hard-fails, the whole derivation does the same.
    The generator is closed and the remaining steps never run. A decline
    consumes nothing: the caller still holds its original state.

    Every application starts a fresh generator, so a derivation rule can be
    reused and can recurse into itself.
    """

    @wraps(steps)
    def rule(state: ParseState[Any, Any]) -> RuleResult[P]:
        generator = steps()
        current = state
        reply: Any = None
        while True:
            try:
                step = generator.send(reply)
            except StopIteration as stop:
                return ParseResult(stop.value, current)

            if isinstance(step, _StateRequest):
                reply = current
                continue

            result = step(current)
            if not isinstance(result, ParseResult):
                generator.close()
                return result
            current = result.state
            reply = result.value

    return rule


def bind[P, R](subrule: Rule[P], continuation: Callable[[P], Rule[R]]) -> Rule[R]:
    """Run ``subrule``, then the rule ``continuation`` builds from its product.

    The two-step form of ``derivation``: the product is the second rule's
    product, and the second rule starts where ``subrule`` stopped.

    Example:
        >>> count = semantics(term(str.isdigit), int)
        >>> counted = bind(count, lambda n: repeat_exactly(n, literal("x")))
        >>> counted(ParseState("3xxxy")).value
        ('x', 'x', 'x')
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[R]:
        first = subrule(state)
        if not isinstance(first, ParseResult):
            return first
        return continuation(first.value)(first.state)

    return rule
