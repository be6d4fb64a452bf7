"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        3000-3099: Syntax errors (driver classification, escalated failures)
        3100-3199: Grammar errors (rule construction mistakes found at match time)
        3200-3299: Input limit errors (size and nesting limits)
    """

    # Syntax errors (3000-3099)
    UNEXPECTED_EOF = 3001
    INVALID_INPUT = 3002
    LEFTOVER_INPUT = 3003
    EXPECTATION_FAILED = 3004

    # Grammar errors (3100-3199)
    NO_PROGRESS = 3101

    # Input limit errors (3200-3299)
    NESTING_DEPTH_EXCEEDED = 3201
    SOURCE_TOO_LARGE = 3202
    NUMBER_TOO_LARGE = 3203


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Token sequence location for error reporting.

    Note:
        Offsets count tokens, not bytes. For character input this means
        Unicode code points, which differ from UTF-8 byte offsets for
        multi-byte characters.

    Attributes:
        start: Starting token offset (0-indexed)
        end: Ending token offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line or
                column is less than 1 (both are 1-indexed).
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Token location (None when the position is unknown)
        hint: Suggestion for fixing the error
        expected: Constructs the grammar expected at the error position
        found: Rendering of the input found at the error position
        position: Token offset, used when no line/column span is available
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    expected: tuple[str, ...] = ()
    found: str | None = None
    position: int | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[EXPECTATION_FAILED]: an array is unclosed; "]" expected where "x" is
              --> line 1, column 5
              = expected: "]"
              = found: x

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
