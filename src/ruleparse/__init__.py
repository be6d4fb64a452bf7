"""ruleparse - parser combinators over immutable parse states.

Rules are pure functions from a ParseState to a match, a decline, or an
escalated hard failure. Grammars are built by composing rules directly in
Python; a driver runs the root rule and classifies the outcome.

Public API:
    ParseState - Immutable token position plus auxiliary context
    term, literal, regex_terminal - Terminal rules
    sequence, choice, optional - Structural combinators
    repeat_zero_or_more, repeat_one_or_more - Repetition
    semantics, constant_semantics - Product transformation
    derivation - Data-dependent multi-step rules (generator based)
    failpoint - Escalate a decline into a hard failure
    with_context_update - Update context after a match
    run_rule - Run a root rule and classify the outcome

Exceptions:
    RuleError - Base exception class
    RuleSyntaxError - Input rejected by a grammar

Submodules:
    ruleparse.engine - Every combinator, state and outcome type
    ruleparse.diagnostics - Diagnostic codes, templates and formatting
    ruleparse.json - JSON grammar and loader built on the engine
"""

from .diagnostics import RuleError, RuleSyntaxError
from .engine import (
    GET_STATE,
    Escalated,
    HardFailure,
    InvalidInput,
    LeftoverInput,
    Outcome,
    ParseError,
    ParseResult,
    ParseState,
    Rule,
    RuleResult,
    Success,
    TextPosition,
    anything,
    bind,
    choice,
    constant_semantics,
    derivation,
    emptiness,
    escalate,
    exclude,
    expectation_error,
    failpoint,
    flatten,
    invisible_sequence,
    lazy,
    literal,
    literal_alternatives,
    literal_sequence,
    optional,
    regex_terminal,
    repeat_exactly,
    repeat_one_or_more,
    repeat_zero_or_more,
    rule_match,
    run_rule,
    semantics,
    sequence,
    set_context,
    term,
    track_column,
    track_line,
    update_context,
    with_context_update,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("ruleparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

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
    "RuleError",
    "RuleResult",
    "RuleSyntaxError",
    "Success",
    "TextPosition",
    "__version__",
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
