"""JSON grammar built from engine combinators.

Tokens are the characters of the source text. The context tracks line,
column and nesting depth, so every escalated error points to where the
document went wrong.

Grammar (RFC 8259):
    text     ::= ws value ws
    value    ::= string | number | "true" | "false" | "null" | array | object
    array    ::= "[" ws [value ("," value)*] ws "]"
    object   ::= "{" ws [entry ("," entry)*] ws "}"
    entry    ::= string ws ":" ws value
    number   ::= "-"? ("0" | [1-9][0-9]*) ("." [0-9]+)? ([eE] [+-]? [0-9]+)?
    string   ::= '"' (unescaped | "\\" escape)* '"'

After an opening bracket, a separator, a decimal point, an exponent sign or
a backslash, the rest of the construct is mandatory. Those positions are
failpoints and produce hard errors instead of backtracking.
"""

import sys
from collections.abc import Generator, Sequence
from dataclasses import dataclass
from typing import Any

from ruleparse.diagnostics import ErrorTemplate
from ruleparse.engine import (
    GET_STATE,
    ParseError,
    ParseResult,
    ParseState,
    Rule,
    RuleResult,
    choice,
    constant_semantics,
    derivation,
    escalate,
    exclude,
    expectation_error,
    failpoint,
    flatten,
    literal,
    literal_alternatives,
    literal_sequence,
    optional,
    repeat_exactly,
    repeat_one_or_more,
    repeat_zero_or_more,
    semantics,
    sequence,
    term,
    track_column,
    track_line,
    update_context,
    with_context_update,
)
from ruleparse.engine.escalation import ErrorFactory

from .nodes import Array, Node, Object, Scalar

__all__ = ["DocumentContext", "build_json_rule"]

_HEX_DIGITS = "0123456789abcdefABCDEF"

_ESCAPED_CHARACTERS = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)

type Steps[P] = Generator[Any, Any, P]


@dataclass(frozen=True, slots=True)
class DocumentContext:
    """Parse context for JSON documents.

    Attributes:
        line: Current line (1-indexed)
        column: Current column (1-indexed)
        depth: Number of arrays/objects currently open
    """

    line: int = 1
    column: int = 1
    depth: int = 0


def _char(value: str) -> Rule[str]:
    """Single non-line-break character literal that advances the column."""
    return track_column(literal(value))


def _number_node(parts: Sequence[Any]) -> Node:
    _sign, _integral, fraction, exponent = parts
    text = "".join(flatten(parts))
    if fraction is None and exponent is None:
        return Scalar(int(text))
    return Scalar(float(text))


def _number_too_large(digits: int, max_digits: int, start: ParseState[Any, Any]) -> ErrorFactory:
    def error_fn(_remainder: Sequence[Any], _state: ParseState[Any, Any]) -> ParseError:
        diagnostic = ErrorTemplate.number_too_large(
            digits, max_digits, span=start.span(), position=start.pos
        )
        return ParseError.from_diagnostic(diagnostic, start)

    return error_fn


def build_json_rule(max_nesting_depth: int) -> Rule[Node]:  # noqa: PLR0915
    """Build the root JSON rule.

    Args:
        max_nesting_depth: Maximum number of simultaneously open arrays/objects

    Returns:
        Rule whose product is the document's root Node. Apply it to a
        ``ParseState(source, 0, DocumentContext())``.
    """

    def nesting_error(_remainder: Sequence[Any], state: ParseState[Any, Any]) -> ParseError:
        diagnostic = ErrorTemplate.nesting_depth_exceeded(
            max_nesting_depth, span=state.span(), position=state.pos
        )
        return ParseError.from_diagnostic(diagnostic, state)

    too_deep = escalate(nesting_error)

    # Whitespace
    space = _char(" ")
    tab = _char("\t")
    line_break = track_line(
        choice(literal_sequence("\r\n"), literal("\n"), literal("\r"))
    )
    ws = constant_semantics(repeat_zero_or_more(choice(space, tab, line_break)), None)

    # Structural characters
    def punctuation(char: str, *updaters: Any) -> Rule[str]:
        core = sequence(ws, _char(char), ws)
        if updaters:
            core = with_context_update(core, *updaters)
        return constant_semantics(core, char)

    enter = update_context("depth", lambda depth: depth + 1)
    leave = update_context("depth", lambda depth: depth - 1)

    begin_array = punctuation("[", enter)
    end_array = punctuation("]", leave)
    begin_object = punctuation("{", enter)
    end_object = punctuation("}", leave)
    name_separator = punctuation(":")
    value_separator = punctuation(",")

    # Keywords
    false_lit = constant_semantics(literal_sequence("false", _char), Scalar(False))
    true_lit = constant_semantics(literal_sequence("true", _char), Scalar(True))
    null_lit = constant_semantics(literal_sequence("null", _char), Scalar(None))
    keyword_lit = choice(false_lit, true_lit, null_lit)

    # Numbers
    minus_sign = _char("-")
    plus_sign = _char("+")
    decimal_point = _char(".")
    exponential_sign = literal_alternatives("eE", _char)
    zero_digit = _char("0")
    nonzero_decimal_digit = literal_alternatives("123456789", _char)
    decimal_digit = choice(zero_digit, nonzero_decimal_digit)

    integral_part = choice(
        zero_digit,
        sequence(nonzero_decimal_digit, repeat_zero_or_more(decimal_digit)),
    )
    fractional_part = sequence(
        decimal_point,
        failpoint(
            repeat_one_or_more(decimal_digit),
            expectation_error("in number literal, after a decimal point, decimal digit"),
        ),
    )
    exponential_part = sequence(
        exponential_sign,
        optional(choice(plus_sign, minus_sign)),
        failpoint(
            repeat_one_or_more(decimal_digit),
            expectation_error("in number literal, after an exponent sign, decimal digit"),
        ),
    )
    number_parts = sequence(
        optional(minus_sign),
        integral_part,
        optional(fractional_part),
        optional(exponential_part),
    )

    @derivation
    def number_lit() -> Steps[Node]:
        start = yield GET_STATE
        parts = yield number_parts
        _sign, integral, fraction, exponent = parts
        # int() refuses strings longer than the interpreter's digit limit
        digits = len(flatten(integral))
        max_digits = sys.get_int_max_str_digits()
        if fraction is None and exponent is None and 0 < max_digits < digits:
            yield escalate(_number_too_large(digits, max_digits, start))
        return _number_node(parts)

    # Strings
    string_delimiter = _char('"')
    escape_indicator = _char("\\")
    hexadecimal_digit = track_column(term(lambda char: char in _HEX_DIGITS))
    unescaped_char = exclude(
        track_column(term(lambda char: char >= " ")),
        string_delimiter,
        escape_indicator,
    )

    hex_quad = semantics(
        repeat_exactly(4, failpoint(hexadecimal_digit, expectation_error("hexadecimal digit"))),
        lambda digits: int("".join(digits), 16),
    )
    escaped_code_unit = semantics(
        sequence(escape_indicator, _char("u"), hex_quad), lambda products: products[2]
    )

    def low_surrogate_escape(state: ParseState[Any, Any]) -> RuleResult[int]:
        """A \\u escape of a low surrogate; declines on any other escape."""
        result = escaped_code_unit(state)
        if isinstance(result, ParseResult) and result.value not in _LOW_SURROGATES:
            return None
        return result

    @derivation
    def unicode_char_sequence() -> Steps[str]:
        yield _char("u")
        code = yield hex_quad
        if code in _HIGH_SURROGATES:
            low = yield optional(low_surrogate_escape)
            if low is not None:
                return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
        return chr(code)

    normal_escape_sequence = semantics(
        literal_alternatives(_ESCAPED_CHARACTERS, _char),
        _ESCAPED_CHARACTERS.__getitem__,
    )

    @derivation
    def escape_sequence() -> Steps[str]:
        yield escape_indicator
        character = yield failpoint(
            choice(unicode_char_sequence, normal_escape_sequence),
            expectation_error("escape sequence"),
        )
        return character

    string_char = choice(escape_sequence, unescaped_char)

    @derivation
    def string_lit() -> Steps[str]:
        yield string_delimiter
        contents = yield repeat_zero_or_more(string_char)
        yield failpoint(
            string_delimiter,
            expectation_error('a string is unclosed, or holds a control character; "\\""'),
        )
        return "".join(contents)

    string_value = semantics(string_lit, Scalar)

    # Arrays and objects
    #
    # Every level of nesting recurses through the rules below. The deepest
    # path (a container inside a non-first element) is choice -> array or
    # object_ -> repetition -> _collect -> additional_* -> failpoint, six
    # frames per level; core.depth.FRAMES_PER_LEVEL must stay above it.
    @derivation
    def array() -> Steps[Node]:
        yield begin_array
        state = yield GET_STATE
        if state.context.depth > max_nesting_depth:
            yield too_deep
        values: tuple[Node, ...] = ()
        first_value = yield optional(value)
        if first_value is not None:
            rest_values = yield repeat_zero_or_more(additional_value)
            values = (first_value, *rest_values)
        yield failpoint(end_array, expectation_error('an array is unclosed; "]"'))
        return Array(values)

    @derivation
    def object_() -> Steps[Node]:
        yield begin_object
        state = yield GET_STATE
        if state.context.depth > max_nesting_depth:
            yield too_deep
        entries: tuple[tuple[str, Node], ...] = ()
        first_entry = yield optional(entry)
        if first_entry is not None:
            rest_entries = yield repeat_zero_or_more(additional_entry)
            entries = (first_entry, *rest_entries)
        yield failpoint(
            end_object,
            expectation_error(
                'either "}" or another object entry (which always starts with a string)'
            ),
        )
        return Object(entries)

    value = choice(string_value, number_lit, keyword_lit, array, object_)

    @derivation
    def additional_value() -> Steps[Node]:
        yield value_separator
        content = yield failpoint(value, expectation_error("in an array, after a comma, a value"))
        return content

    def entry_steps(key: Rule[str]) -> Steps[tuple[str, Node]]:
        entry_key = yield key
        yield failpoint(name_separator, expectation_error('after an object key, ":"'))
        entry_val = yield failpoint(value, expectation_error("after an object key, a value"))
        return (entry_key, entry_val)

    @derivation
    def entry() -> Steps[tuple[str, Node]]:
        return (yield from entry_steps(string_lit))

    @derivation
    def additional_entry() -> Steps[tuple[str, Node]]:
        yield value_separator
        return (
            yield from entry_steps(
                failpoint(
                    string_lit, expectation_error("in an object, after a comma, a string key")
                )
            )
        )

    return semantics(sequence(ws, value, ws), lambda products: products[1])
