"""Structural combinators: sequencing, ordered choice, optionality, repetition.

Failure semantics shared by every combinator in this module:
    - ``None`` (no match) is local: a sequence that fails part-way returns
      None and the caller keeps its own, untouched input state.
    - ``HardFailure`` is returned unchanged the moment a sub-rule produces it.
      Choice does not try later alternatives and repetition discards what it
      collected so far.

Products of multi-rule combinators are tuples.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from ruleparse.diagnostics import ErrorTemplate
from ruleparse.engine.primitives import literal, semantics
from ruleparse.engine.state import (
    HardFailure,
    ParseError,
    ParseResult,
    ParseState,
    Rule,
    RuleResult,
)

__all__ = [
    "choice",
    "flatten",
    "invisible_sequence",
    "lazy",
    "literal_alternatives",
    "literal_sequence",
    "optional",
    "repeat_exactly",
    "repeat_one_or_more",
    "repeat_zero_or_more",
    "sequence",
]

logger = logging.getLogger(__name__)


def sequence(*subrules: Rule[Any]) -> Rule[tuple[Any, ...]]:
    """Concatenation: each sub-rule in order, each starting where the last ended.

    EBNF equivalent:
        a = b, c, d ;

    The product is ``(b_product, c_product, d_product)``. If any sub-rule does
    not match, the whole sequence does not match and nothing is consumed.

    Example:
        >>> ab = sequence(literal("a"), literal("b"))
        >>> result = ab(ParseState("abc"))
        >>> result.value, result.state.remainder
        (('a', 'b'), 'c')
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[tuple[Any, ...]]:
        products: list[Any] = []
        current = state
        for subrule in subrules:
            result = subrule(current)
            if not isinstance(result, ParseResult):
                return result
            products.append(result.value)
            current = result.state
        return ParseResult(tuple(products), current)

    return rule


def choice[P](*subrules: Rule[P]) -> Rule[P]:
    """Ordered choice: the first sub-rule that does not decline wins.

    EBNF equivalent:
        a = b | c | d ;

    Alternatives are tried in declaration order against the same state. The
    first match or the first hard failure is returned as-is; later
    alternatives are never attempted. Ambiguity is resolved by order, never by
    match length.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[P]:
        for subrule in subrules:
            result = subrule(state)
            if result is not None:
                return result
        return None

    return rule


def optional[P, D](subrule: Rule[P], default: D = None) -> Rule[P | D]:
    """Optional match: ``subrule`` or nothing.

    EBNF equivalent:
        a = [b] ;

    Never declines. When ``subrule`` declines, the product is ``default`` and
    the state is unchanged. Hard failures pass through.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[P | D]:
        result = subrule(state)
        if result is None:
            return ParseResult(default, state)
        return result

    return rule


def _collect[P](
    subrule: Rule[P],
    state: ParseState[Any, Any],
    limit: int | None = None,
) -> ParseResult[tuple[P, ...]] | HardFailure:
    """Apply ``subrule`` repeatedly, up to ``limit`` times.

    Stops at the first decline. A match that leaves the state exactly where it
    was would repeat forever; it is escalated as NO_PROGRESS instead.
    """
    products: list[P] = []
    current = state
    while limit is None or len(products) < limit:
        result = subrule(current)
        if result is None:
            break
        if isinstance(result, HardFailure):
            return result
        if result.state.same_position(current):
            logger.warning(
                "Repeated rule matched without progress at position %d; "
                "aborting repetition",
                current.pos,
            )
            diagnostic = ErrorTemplate.no_progress(span=current.span(), position=current.pos)
            return HardFailure(ParseError.from_diagnostic(diagnostic, current))
        products.append(result.value)
        current = result.state
    return ParseResult(tuple(products), current)


def repeat_zero_or_more[P](subrule: Rule[P]) -> Rule[tuple[P, ...]]:
    """Zero-or-more repetition.

    EBNF equivalent:
        a = {b} ;

    The product is a tuple of every match, possibly empty. Never declines.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[tuple[P, ...]]:
        return _collect(subrule, state)

    return rule


def repeat_one_or_more[P](subrule: Rule[P]) -> Rule[tuple[P, ...]]:
    """One-or-more repetition.

    EBNF equivalent:
        a = {b}- ;

    Declines when ``subrule`` does not match even once.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[tuple[P, ...]]:
        result = _collect(subrule, state)
        if isinstance(result, ParseResult) and not result.value:
            return None
        return result

    return rule


def repeat_exactly[P](count: int, subrule: Rule[P]) -> Rule[tuple[P, ...]]:
    """Exactly ``count`` consecutive matches of ``subrule``.

    EBNF equivalent:
        a = count * b ;

    Declines when fewer than ``count`` matches are available. Further matches
    beyond ``count`` are left unconsumed.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[tuple[P, ...]]:
        result = _collect(subrule, state, limit=count)
        if isinstance(result, ParseResult) and len(result.value) < count:
            return None
        return result

    return rule


def literal_sequence[T](
    tokens: Iterable[T],
    rule_factory: Callable[[T], Rule[Any]] = literal,
) -> Rule[tuple[Any, ...]]:
    """Exact ordered run of literal tokens.

    EBNF equivalent:
        a = "t", "r", "u", "e" ;

    ``rule_factory`` builds the per-token rule, so callers can wrap each
    literal, e.g. with column tracking. The product is the tuple of the
    per-token products.
    """
    return sequence(*(rule_factory(token) for token in tokens))


def literal_alternatives[T](
    tokens: Iterable[T],
    rule_factory: Callable[[T], Rule[Any]] = literal,
) -> Rule[Any]:
    """Any one of the given literal tokens, tried in order.

    EBNF equivalent:
        a = "e" | "E" ;
    """
    return choice(*(rule_factory(token) for token in tokens))


def invisible_sequence[P](subrule: Rule[P], *followers: Rule[Any]) -> Rule[P]:
    """``subrule`` followed by ``followers``, keeping only ``subrule``'s product.

    The followers still have to match and still consume input.
    """
    return semantics(sequence(subrule, *followers), lambda products: products[0])


def lazy[P](factory: Callable[[], Rule[P]]) -> Rule[P]:
    """Forward reference for recursive grammars.

    ``factory`` is called on every application, so it may name a rule that is
    defined after this one.

    Example:
        >>> value = choice(literal("x"), lazy(lambda: nested))
        >>> nested = sequence(literal("["), value, literal("]"))
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[P]:
        return factory()(state)

    return rule


def flatten(products: object) -> tuple[Any, ...]:
    """Flatten nested tuple/list products into one tuple.

    ``None`` entries (absent optional parts) are dropped; every other leaf is
    kept in order.

    Example:
        >>> flatten(("-", ("1", "2"), None, (".", ("5",))))
        ('-', '1', '2', '.', '5')
    """
    if products is None:
        return ()
    if not isinstance(products, (tuple, list)):
        return (products,)
    flat: list[Any] = []
    for item in products:
        flat.extend(flatten(item))
    return tuple(flat)
