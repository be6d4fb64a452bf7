"""State extension: context updates layered over ordinary rules.

Grammars keep auxiliary bookkeeping in ``ParseState.context``: line and
column, nesting depth, counters. The context only changes through the
helpers here. They run after a successful match and never touch the product
or the remainder, so higher-level rules compose without knowing about them.

Contexts are either frozen dataclasses (updated with ``dataclasses.replace``)
or mappings (copied into a new dict). Neither is ever mutated in place.
"""

import dataclasses
from collections.abc import Callable, Mapping
from typing import Any

from ruleparse.engine.state import ParseResult, ParseState, Rule, RuleResult

__all__ = [
    "ContextUpdater",
    "set_context",
    "track_column",
    "track_line",
    "update_context",
    "with_context_update",
]

type ContextUpdater = Callable[[Any], Any]


def with_context_update[P](subrule: Rule[P], *updaters: ContextUpdater) -> Rule[P]:
    """Apply ``updaters`` in order to the context after ``subrule`` matches.

    Nesting is associative:
    ``with_context_update(with_context_update(r, f), g)`` behaves exactly like
    ``with_context_update(r, f, g)``.
    """

    def rule(state: ParseState[Any, Any]) -> RuleResult[P]:
        result = subrule(state)
        if not isinstance(result, ParseResult):
            return result
        context = result.state.context
        for updater in updaters:
            context = updater(context)
        return ParseResult(result.value, result.state.with_context(context))

    return rule


def _replace_field(context: Any, name: str, value: Any) -> Any:
    if isinstance(context, Mapping):
        return {**context, name: value}
    if dataclasses.is_dataclass(context) and not isinstance(context, type):
        return dataclasses.replace(context, **{name: value})
    msg = f"Context of type {type(context).__name__} does not support field updates"
    raise TypeError(msg)


def _read_field(context: Any, name: str) -> Any:
    if isinstance(context, Mapping):
        return context[name]
    return getattr(context, name)


def update_context(name: str, fn: Callable[[Any], Any]) -> ContextUpdater:
    """Updater replacing context field ``name`` with ``fn(old_value)``.

    Example:
        >>> bump = update_context("column", lambda c: c + 1)
        >>> bump(TextPosition(line=2, column=5))
        TextPosition(line=2, column=6)
    """

    def updater(context: Any) -> Any:
        return _replace_field(context, name, fn(_read_field(context, name)))

    return updater


def set_context(name: str, value: Any) -> ContextUpdater:
    """Updater setting context field ``name`` to ``value``."""

    def updater(context: Any) -> Any:
        return _replace_field(context, name, value)

    return updater


def _increment(value: int) -> int:
    return value + 1


def track_column[P](subrule: Rule[P]) -> Rule[P]:
    """Advance the context column by one when ``subrule`` matches.

    For rules that match a single non-line-break character.
    """
    return with_context_update(subrule, update_context("column", _increment))


def track_line[P](subrule: Rule[P]) -> Rule[P]:
    """Move the context to the start of the next line when ``subrule`` matches."""
    return with_context_update(
        subrule,
        update_context("line", _increment),
        set_context("column", 1),
    )
