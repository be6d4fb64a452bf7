"""Diagnostic formatting service.

Renders a Diagnostic as compiler-style text, a single line, or JSON.
Python 3.13+. Zero external dependencies.
"""

import json
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_BOLD_RED = "\033[1;31m"
_RESET = "\033[0m"


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate echoed input and messages to max_content_length
        color: Wrap the "error" label in ANSI codes (rust style only)
        max_content_length: Maximum content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> diagnostic = ErrorTemplate.expectation_failed('"]"', "x")
        >>> print(formatter.format(diagnostic))
        error[EXPECTATION_FAILED]: "]" expected where "x" is
          = expected: "]"
          = found: x

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(diagnostic))
        EXPECTATION_FAILED: "]" expected where "x" is
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render ``diagnostic`` in the configured output format."""
        message = self._clip(diagnostic.message)
        match self.output_format:
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {message}"
            case OutputFormat.JSON:
                return json.dumps(self._fields(diagnostic), ensure_ascii=False)
            case OutputFormat.RUST:
                return self._format_rust(diagnostic, message)

    def _format_rust(self, diagnostic: Diagnostic, message: str) -> str:
        """Compiler-style block: header, then one indented line per detail.

        Example output:
            error[LEFTOVER_INPUT]: leftover data after a valid node "x"
              --> line 1, column 3
              = help: Remove trailing content after the document
        """
        label = f"{_BOLD_RED}error{_RESET}" if self.color else "error"
        lines = [f"{label}[{diagnostic.code.name}]: {message}"]

        span = diagnostic.span
        if span is not None:
            lines.append(f"  --> line {span.line}, column {span.column}")
        elif diagnostic.position is not None:
            lines.append(f"  --> position {diagnostic.position}")

        fields = self._fields(diagnostic)
        if "expected" in fields:
            lines.append(f"  = expected: {', '.join(diagnostic.expected)}")
        if "found" in fields:
            lines.append(f"  = found: {fields['found']}")
        if "hint" in fields:
            lines.append(f"  = help: {fields['hint']}")
        return "\n".join(lines)

    def _fields(self, diagnostic: Diagnostic) -> dict[str, object]:
        """Flatten a diagnostic into JSON-ready fields, omitting empty ones."""
        fields: dict[str, object] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._clip(diagnostic.message),
        }
        span = diagnostic.span
        if span is not None:
            fields.update(line=span.line, column=span.column, start=span.start, end=span.end)
        elif diagnostic.position is not None:
            fields["position"] = diagnostic.position
        if diagnostic.expected:
            fields["expected"] = list(diagnostic.expected)
        if diagnostic.found is not None:
            fields["found"] = self._clip(diagnostic.found)
        if diagnostic.hint:
            fields["hint"] = self._clip(diagnostic.hint)
        return fields

    def _clip(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
