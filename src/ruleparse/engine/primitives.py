"""Primitive rules: terminals and semantic hooks.

Terminal rules look at exactly one token. Semantic hooks rewrite the product
of a successful match and leave failures untouched.

Every constructor here is total: building a rule never fails, only running
one can.
"""

import re
from collections.abc import Callable
from typing import Any

from ruleparse.engine.state import ParseResult, ParseState, Rule, RuleResult

__all__ = [
    "anything",
    "constant_semantics",
    "emptiness",
    "exclude",
    "literal",
    "regex_terminal",
    "semantics",
    "term",
]


def term[T](predicate: Callable[[T], object]) -> Rule[T]:
    """Rule accepting one token for which ``predicate(token)`` is truthy.

    EBNF equivalent:
        a = ? predicate(token) ? ;

    The product is the token itself. At end of input the rule never matches
    and the predicate is not called.

    Example:
        >>> digit = term(str.isdigit)
        >>> digit(ParseState("7x")).value
        '7'
        >>> digit(ParseState("x7")) is None
        True
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[T]:
        if state.is_eof:
            return None
        token = state.current
        if not predicate(token):
            return None
        return ParseResult(token, state.advance())

    return rule


def literal[T](value: T) -> Rule[T]:
    """Rule accepting exactly one token equal to ``value``.

    EBNF equivalent:
        a = "value" ;
    """
    return term(lambda token: token == value)


def regex_terminal(pattern: str | re.Pattern[str], flags: int = 0) -> Rule[str]:
    """Rule accepting one string token that fully matches ``pattern``.

    Non-string tokens never match.

    Example:
        >>> number = regex_terminal(r"[0-9]+")
        >>> number(ParseState(["42", "+"])).value
        '42'
    """
    compiled = re.compile(pattern, flags)

    def matches(token: object) -> bool:
        return isinstance(token, str) and compiled.fullmatch(token) is not None

    return term(matches)


def _accept_any(_token: object) -> bool:
    return True


anything: Rule[Any] = term(_accept_any)
"""Rule accepting any single token (but never end of input)."""


def emptiness(state: ParseState[Any, Any]) -> RuleResult[None]:
    """Rule that always matches without consuming anything; product is None."""
    return ParseResult(None, state)


def semantics[P, R](subrule: Rule[P], transform: Callable[[P], R]) -> Rule[R]:
    """Attach a semantic hook to ``subrule``.

    On a match the product becomes ``transform(product)``; the state is
    unchanged. No match and hard failures pass through untouched.

    ``transform`` must be total over the product type and must not depend on
    or modify parse state.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[R]:
        result = subrule(state)
        if isinstance(result, ParseResult):
            return ParseResult(transform(result.value), result.state)
        return result

    return rule


def constant_semantics[R](subrule: Rule[Any], value: R) -> Rule[R]:
    """``semantics`` whose product is always ``value``."""
    return semantics(subrule, lambda _: value)


def exclude[P](subrule: Rule[P], *subtrahends: Rule[Any]) -> Rule[P]:
    """Match ``subrule`` only where none of ``subtrahends`` match.

    EBNF equivalent:
        a = b - c ;

    The subtrahends are tried first, against the same state. If one of them
    matches, the rule declines. A hard failure from a subtrahend propagates.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[P]:
        for subtrahend in subtrahends:
            excluded = subtrahend(state)
            if isinstance(excluded, ParseResult):
                return None
            if excluded is not None:
                return excluded
        return subrule(state)

    return rule
