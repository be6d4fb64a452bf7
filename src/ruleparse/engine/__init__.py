"""Parser-combinator engine.

Rules are plain callables ``ParseState -> ParseResult | HardFailure | None``.
The constructors in this package build rules from other rules; the driver
runs a root rule and classifies the outcome.

Modules:
    state: ParseState, TextPosition, ParseResult, HardFailure, ParseError
    primitives: term, literal, regex_terminal, semantics, constant_semantics
    structural: sequence, choice, optional, repetition, literal runs
    derivation: generator-based data-dependent composition
    escalation: failpoint and error factories
    context: context updates layered over rules
    driver: run_rule, rule_match, outcome types
"""

from .context import (
    set_context,
    track_column,
    track_line,
    update_context,
    with_context_update,
)
from .derivation import GET_STATE, bind, derivation
from .driver import (
    Escalated,
    InvalidInput,
    LeftoverInput,
    Outcome,
    Success,
    rule_match,
    run_rule,
)
from .escalation import escalate, expectation_error, failpoint
from .primitives import (
    anything,
    constant_semantics,
    emptiness,
    exclude,
    literal,
    regex_terminal,
    semantics,
    term,
)
from .state import (
    HardFailure,
    ParseError,
    ParseResult,
    ParseState,
    Rule,
    RuleResult,
    TextPosition,
)
from .structural import (
    choice,
    flatten,
    invisible_sequence,
    lazy,
    literal_alternatives,
    literal_sequence,
    optional,
    repeat_exactly,
    repeat_one_or_more,
    repeat_zero_or_more,
    sequence,
)

__all__ = [
    "GET_STATE",
    "Escalated",
    "HardFailure",
    "InvalidInput",
    "LeftoverInput",
    "Outcome",
    "ParseError",
    "ParseResult",
    "ParseState",
    "Rule",
    "RuleResult",
    "Success",
    "TextPosition",
    "anything",
    "bind",
    "choice",
    "constant_semantics",
    "derivation",
    "emptiness",
    "escalate",
    "exclude",
    "expectation_error",
    "failpoint",
    "flatten",
    "invisible_sequence",
    "lazy",
    "literal",
    "literal_alternatives",
    "literal_sequence",
    "optional",
    "regex_terminal",
    "repeat_exactly",
    "repeat_one_or_more",
    "repeat_zero_or_more",
    "rule_match",
    "run_rule",
    "semantics",
    "sequence",
    "set_context",
    "term",
    "track_column",
    "track_line",
    "update_context",
    "with_context_update",
]
