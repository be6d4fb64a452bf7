"""Immutable parse state and rule result types.

Implements the immutable state pattern every combinator threads through.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - ParseState is immutable (frozen dataclass)
    - Tokens are never copied: a state is (tokens, pos, context)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW state, so a failed attempt leaves the
      caller's state valid for backtracking
    - Line:column read from the context or computed on-demand for text input

Rule Results:
    A rule is ``ParseState -> ParseResult | HardFailure | None``:
    - ParseResult(value, state): matched, state is the unconsumed suffix
    - None: the rule declines; the caller still holds its input state
    - HardFailure(error): escalated, propagates through every combinator

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - Clojure FnParse
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ruleparse.constants import MAX_FOUND_PREVIEW
from ruleparse.diagnostics import Diagnostic, DiagnosticCode, ErrorTemplate, SourceSpan

__all__ = [
    "HardFailure",
    "ParseError",
    "ParseResult",
    "ParseState",
    "Rule",
    "RuleResult",
    "TextPosition",
]


def _context_field(context: object, name: str) -> object:
    """Read a field from a dataclass-like or mapping context."""
    if isinstance(context, Mapping):
        return context.get(name)
    return getattr(context, name, None)


@dataclass(frozen=True, slots=True)
class TextPosition:
    """Line and column context for character-level grammars.

    Both fields are 1-indexed, like text editors. Grammars advance them
    through ``track_column`` and ``track_line`` rather than by hand.

    Example:
        >>> pos = TextPosition()
        >>> (pos.line, pos.column)
        (1, 1)
    """

    line: int = 1
    column: int = 1


@dataclass(frozen=True, slots=True)
class ParseState[T, C]:
    """Immutable token position plus auxiliary context.

    Type Parameters:
        T: Token type (``str`` characters for text input)
        C: Context type (TextPosition, a grammar-specific dataclass, a mapping)

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (one state per successful sub-match)
        3. Offset into shared tokens - remainder is never copied while parsing
        4. Context only changes through explicit combinators

    Example:
        >>> state = ParseState("abc")
        >>> state.current
        'a'
        >>> state.advance().remainder
        'bc'
        >>> state.remainder  # Original unchanged (immutability)
        'abc'
    """

    tokens: Sequence[T]
    pos: int = 0
    context: C = None  # type: ignore[assignment]

    @classmethod
    def for_text(cls, source: str) -> "ParseState[str, TextPosition]":
        """Create the initial state for character input with line/column tracking."""
        return ParseState(source, 0, TextPosition())

    @property
    def is_eof(self) -> bool:
        """True when every token has been consumed."""
        return self.pos >= len(self.tokens)

    @property
    def current(self) -> T:
        """Get current token.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(self.pos)
            raise EOFError(diagnostic.message)
        return self.tokens[self.pos]

    @property
    def remainder(self) -> Sequence[T]:
        """The unconsumed suffix of the token sequence.

        Note:
            Slices the underlying sequence; intended for error reporting and
            driver classification, not for per-token matching.
        """
        return self.tokens[self.pos :]

    def peek(self, offset: int = 0) -> T | None:
        """Token at position + offset, or None beyond EOF."""
        target_pos = self.pos + offset
        if target_pos >= len(self.tokens):
            return None
        return self.tokens[target_pos]

    def advance(self, count: int = 1) -> "ParseState[T, C]":
        """Return new state advanced by count tokens (context unchanged).

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            msg = f"ParseState.advance count must be >= 0, got {count}"
            raise ValueError(msg)
        new_pos = min(self.pos + count, len(self.tokens))
        return ParseState(self.tokens, new_pos, self.context)

    def with_context(self, context: C) -> "ParseState[T, C]":
        """Return new state at the same position carrying ``context``."""
        return ParseState(self.tokens, self.pos, context)

    def same_position(self, other: "ParseState[T, C]") -> bool:
        """True when both states sit at the same offset with equal context."""
        return self.pos == other.pos and self.context == other.context

    def location(self) -> tuple[int, int] | None:
        """Line and column of the current position.

        Returns:
            (line, column) from the context when it tracks them, otherwise
            computed from the source for text input, otherwise None.

        Performance:
            O(n) for the text fallback. Only call for error reporting!

        Example:
            >>> ParseState("ab\\ncd", 4).location()
            (2, 2)
        """
        line = _context_field(self.context, "line")
        column = _context_field(self.context, "column")
        if isinstance(line, int) and isinstance(column, int):
            return (line, column)

        if isinstance(self.tokens, str):
            source = self.tokens
            pos = min(self.pos, len(source))
            line = source.count("\n", 0, pos) + 1
            last_newline = source.rfind("\n", 0, pos)
            col = pos - last_newline if last_newline >= 0 else pos + 1
            return (line, col)

        return None

    def span(self, end: int | None = None) -> SourceSpan | None:
        """SourceSpan from the current position, or None if location is unknown."""
        loc = self.location()
        if loc is None:
            return None
        line, column = loc
        return SourceSpan(
            start=self.pos,
            end=self.pos if end is None else max(end, self.pos),
            line=max(line, 1),
            column=max(column, 1),
        )

    def preview(self, limit: int = MAX_FOUND_PREVIEW) -> str | None:
        """Render up to ``limit`` remaining tokens for messages (None at EOF)."""
        if self.is_eof:
            return None
        chunk = self.tokens[self.pos : self.pos + limit]
        if isinstance(chunk, str):
            return chunk
        return " ".join(str(token) for token in chunk)


@dataclass(frozen=True, slots=True)
class ParseResult[P]:
    """Successful match: product plus the state after the match.

    Type Parameters:
        P: The type of the product

    Example:
        >>> state = ParseState("hello")
        >>> result = ParseResult("h", state.advance())
        >>> result.value
        'h'
        >>> result.state.pos
        1
    """

    value: P
    state: ParseState[Any, Any]


@dataclass(frozen=True, slots=True)
class ParseError:
    """Escalated parse error with location and context.

    Design:
        - Stores state at error point (for line:column)
        - User-friendly message
        - Expected constructs tuple (immutable for better errors)
        - Immutable, travels inside HardFailure as plain data

    Example:
        >>> error = ParseError("Expected ']'", ParseState("[1", 2), expected=("]",))
        >>> error.format_error()
        "1:3: Expected ']' (expected: ']')"
    """

    message: str
    state: ParseState[Any, Any]
    expected: tuple[str, ...] = field(default_factory=tuple)
    found: str | None = None
    code: DiagnosticCode = DiagnosticCode.EXPECTATION_FAILED

    @classmethod
    def from_diagnostic(cls, diagnostic: Diagnostic, state: ParseState[Any, Any]) -> "ParseError":
        """Build a ParseError that carries a template diagnostic's fields."""
        return cls(
            message=diagnostic.message,
            state=state,
            expected=diagnostic.expected,
            found=diagnostic.found,
            code=diagnostic.code,
        )

    def format_error(self) -> str:
        """Format error with line:column, or token position when unknown.

        Example:
            >>> ParseError("Unexpected", ParseState([1, 2, 3], 1)).format_error()
            'position 1: Unexpected'
        """
        loc = self.state.location()
        if loc is None:
            error_msg = f"position {self.state.pos}: {self.message}"
        else:
            line, col = loc
            error_msg = f"{line}:{col}: {self.message}"

        if self.expected:
            expected_str = ", ".join(f"'{e}'" for e in self.expected)
            error_msg += f" (expected: {expected_str})"

        return error_msg

    def format_with_context(self, context_lines: int = 2) -> str:
        """Format error with source context and pointer.

        Shows the problematic line and a caret pointing to the error location.
        Only text input has lines to show; other token sequences fall back to
        format_error().

        Args:
            context_lines: Number of lines to show before/after error

        Returns:
            Multi-line formatted error with context

        Example:
            >>> source = '[1,\\n 2'
            >>> error = ParseError("Expected ']'", ParseState(source, 6))
            >>> print(error.format_with_context())
            2:3: Expected ']'
            <BLANKLINE>
               1 | [1,
               2 |  2
                 |   ^
        """
        if not isinstance(self.state.tokens, str):
            return self.format_error()

        loc = self.state.location()
        if loc is None:  # pragma: no cover - text input always has a location
            return self.format_error()
        line, col = loc
        lines = self.state.tokens.split("\n")

        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])

            if i == line:
                pointer = " " * (len(line_num_str) - 2) + "| " + " " * (col - 1) + "^"
                result_lines.append(pointer)

        return "\n".join(result_lines)

    def to_diagnostic(self) -> Diagnostic:
        """Structured Diagnostic for formatting and exceptions."""
        return Diagnostic(
            code=self.code,
            message=self.message,
            span=self.state.span(),
            expected=self.expected,
            found=self.found,
            position=self.state.pos,
        )


@dataclass(frozen=True, slots=True)
class HardFailure:
    """Escalated failure propagated as a return value.

    No combinator except the ones that produce it inspects a HardFailure;
    choice and repetition return it unchanged, so it always unwinds to the
    driver.
    """

    error: ParseError


type RuleResult[P] = ParseResult[P] | HardFailure | None
type Rule[P] = Callable[[ParseState[Any, Any]], RuleResult[P]]
