"""Tests for diagnostic codes, templates, formatting and exceptions."""

from __future__ import annotations

import json

import pytest

from ruleparse.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
    RuleError,
    RuleSyntaxError,
    SourceSpan,
)

# ============================================================================
# CODES AND SPANS
# ============================================================================


class TestDiagnosticCode:
    """Test DiagnosticCode values."""

    def test_codes_are_unique(self) -> None:
        """Every code has a distinct numeric value."""
        values = [code.value for code in DiagnosticCode]

        assert len(values) == len(set(values))

    def test_code_ranges(self) -> None:
        """Codes sit in their category ranges."""
        assert 3000 <= DiagnosticCode.EXPECTATION_FAILED.value < 3100
        assert 3100 <= DiagnosticCode.NO_PROGRESS.value < 3200
        assert 3200 <= DiagnosticCode.NESTING_DEPTH_EXCEEDED.value < 3300


class TestSourceSpan:
    """Test SourceSpan validation."""

    def test_valid_span(self) -> None:
        """A well-formed span constructs."""
        span = SourceSpan(start=2, end=5, line=1, column=3)

        assert (span.start, span.end) == (2, 5)

    @pytest.mark.parametrize(
        ("start", "end", "line", "column", "fragment"),
        [
            (-1, 0, 1, 1, "start must be >= 0"),
            (5, 2, 1, 1, "must be >= start"),
            (0, 0, 0, 1, "line must be >= 1"),
            (0, 0, 1, 0, "column must be >= 1"),
        ],
    )
    def test_invalid_span(
        self, start: int, end: int, line: int, column: int, fragment: str
    ) -> None:
        """Invalid fields raise ValueError."""
        with pytest.raises(ValueError, match=fragment):
            SourceSpan(start=start, end=end, line=line, column=column)


# ============================================================================
# TEMPLATES
# ============================================================================


class TestErrorTemplate:
    """Test ErrorTemplate messages."""

    def test_expectation_failed_with_token(self) -> None:
        """Expectation message quotes the found token."""
        diagnostic = ErrorTemplate.expectation_failed('"]"', "x", position=3)

        assert diagnostic.message == '"]" expected where "x" is'
        assert diagnostic.expected == ('"]"',)
        assert diagnostic.position == 3

    def test_expectation_failed_at_eof(self) -> None:
        """Expectation message at EOF names the end of input."""
        diagnostic = ErrorTemplate.expectation_failed('"]"', None)

        assert diagnostic.message == '"]" expected where the end of input is'

    def test_driver_templates(self) -> None:
        """Invalid and leftover messages quote the input."""
        assert ErrorTemplate.invalid_input("x").message == 'invalid document "x"'
        assert ErrorTemplate.invalid_input(None).message == "invalid document the end of input"
        assert ErrorTemplate.leftover_input("]").message == 'leftover data after a valid node "]"'

    def test_limit_templates(self) -> None:
        """Limit diagnostics carry their codes and numbers."""
        depth = ErrorTemplate.nesting_depth_exceeded(100, position=7)
        size = ErrorTemplate.source_too_large(11, 10)

        assert depth.code == DiagnosticCode.NESTING_DEPTH_EXCEEDED
        assert depth.message == "Maximum nesting depth (100) exceeded"
        assert size.code == DiagnosticCode.SOURCE_TOO_LARGE
        assert "11 characters" in size.message

    def test_number_too_large_template(self) -> None:
        """Digit-limit diagnostic names both counts and how to raise the limit."""
        diagnostic = ErrorTemplate.number_too_large(5000, 4300, position=3)

        assert diagnostic.code == DiagnosticCode.NUMBER_TOO_LARGE
        assert diagnostic.message == "Integer literal has 5000 digits, exceeding the limit of 4300"
        assert diagnostic.position == 3
        assert diagnostic.hint is not None
        assert "set_int_max_str_digits" in diagnostic.hint

    def test_no_progress_template(self) -> None:
        """No-progress diagnostic names the stalled position."""
        diagnostic = ErrorTemplate.no_progress(position=4)

        assert diagnostic.code == DiagnosticCode.NO_PROGRESS
        assert diagnostic.message.endswith("at position 4")
        assert diagnostic.hint is not None

    def test_unexpected_eof_template(self) -> None:
        """EOF diagnostic names the position."""
        assert ErrorTemplate.unexpected_eof(9).message == "Unexpected EOF at position 9"


# ============================================================================
# FORMATTER
# ============================================================================


class TestDiagnosticFormatter:
    """Test DiagnosticFormatter output styles."""

    @pytest.fixture
    def diagnostic(self) -> Diagnostic:
        return ErrorTemplate.expectation_failed(
            '"]"', "x", span=SourceSpan(start=4, end=4, line=2, column=3), position=4
        )

    def test_rust_format(self, diagnostic: Diagnostic) -> None:
        """Rust style lists location, expected and found."""
        output = DiagnosticFormatter().format(diagnostic)

        assert output.split("\n") == [
            'error[EXPECTATION_FAILED]: "]" expected where "x" is',
            "  --> line 2, column 3",
            '  = expected: "]"',
            "  = found: x",
        ]

    def test_rust_format_position_fallback(self) -> None:
        """Without a span the token position is shown."""
        output = DiagnosticFormatter().format(ErrorTemplate.invalid_input("1 2", position=0))

        assert "  --> position 0" in output
        assert "  = help: " in output

    def test_simple_format(self, diagnostic: Diagnostic) -> None:
        """Simple style is one line."""
        output = DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(diagnostic)

        assert output == 'EXPECTATION_FAILED: "]" expected where "x" is'

    def test_json_format(self, diagnostic: Diagnostic) -> None:
        """JSON style is machine readable."""
        output = DiagnosticFormatter(output_format=OutputFormat.JSON).format(diagnostic)
        data = json.loads(output)

        assert data["code"] == "EXPECTATION_FAILED"
        assert data["code_value"] == 3004
        assert (data["line"], data["column"]) == (2, 3)
        assert data["expected"] == ['"]"']
        assert data["found"] == "x"

    def test_sanitize_truncates(self) -> None:
        """Sanitize truncates long content."""
        formatter = DiagnosticFormatter(
            output_format=OutputFormat.SIMPLE, sanitize=True, max_content_length=10
        )

        output = formatter.format(ErrorTemplate.invalid_input("y" * 50))

        assert output == "INVALID_INPUT: invalid do..."

    def test_color_wraps_severity(self, diagnostic: Diagnostic) -> None:
        """Color mode adds ANSI codes around the severity."""
        output = DiagnosticFormatter(color=True).format(diagnostic)

        assert output.startswith("\033[1;31merror\033[0m[EXPECTATION_FAILED]")

    def test_json_omits_empty_fields(self) -> None:
        """Without a span the JSON carries the position; empty fields are left out."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format(ErrorTemplate.no_progress(position=4)))

        assert data["position"] == 4
        assert "line" not in data
        assert "expected" not in data
        assert "found" not in data

    def test_sanitize_clips_found(self) -> None:
        """Sanitize also clips the echoed input in the rust style."""
        formatter = DiagnosticFormatter(sanitize=True, max_content_length=5)

        output = formatter.format(ErrorTemplate.expectation_failed('"]"', "abcdefgh"))

        assert "  = found: abcde..." in output


# ============================================================================
# EXCEPTIONS
# ============================================================================


class TestExceptions:
    """Test RuleError and RuleSyntaxError."""

    def test_rule_error_from_string(self) -> None:
        """String messages carry no diagnostic."""
        error = RuleError("plain")

        assert str(error) == "plain"
        assert error.diagnostic is None

    def test_rule_error_from_diagnostic(self) -> None:
        """Diagnostic messages are formatted Rust style."""
        diagnostic = ErrorTemplate.invalid_input("x")
        error = RuleSyntaxError(diagnostic)

        assert error.diagnostic is diagnostic
        assert str(error).startswith('error[INVALID_INPUT]: invalid document "x"')
        assert error.error is None
        assert isinstance(error, RuleError)

    def test_diagnostic_str_is_message(self) -> None:
        """str(Diagnostic) is the bare message."""
        assert str(ErrorTemplate.unexpected_eof(2)) == "Unexpected EOF at position 2"
