"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from ruleparse.constants import END_OF_INPUT

from .codes import Diagnostic, DiagnosticCode, SourceSpan


def _quote_found(found: str | None) -> str:
    """Render the offending input for a message, or the end-of-input marker."""
    if found is None:
        return END_OF_INPUT
    return f'"{found}"'


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Token requested past the end of the sequence.

        Args:
            position: Token offset where EOF was encountered

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            position=position,
            hint="Check is_eof before reading the current token",
        )

    @staticmethod
    def invalid_input(
        found: str | None,
        *,
        span: SourceSpan | None = None,
        position: int | None = None,
    ) -> Diagnostic:
        """Root rule did not match the input at all.

        Args:
            found: Rendering of the unmatched input (None at end of input)
            span: Location of the initial state
            position: Token offset of the initial state

        Returns:
            Diagnostic for INVALID_INPUT
        """
        msg = f"invalid document {_quote_found(found)}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_INPUT,
            message=msg,
            span=span,
            found=found,
            position=position,
            hint="The input does not start with anything the root rule accepts",
        )

    @staticmethod
    def leftover_input(
        found: str | None,
        *,
        span: SourceSpan | None = None,
        position: int | None = None,
    ) -> Diagnostic:
        """Root rule matched a prefix but input remains.

        Args:
            found: Rendering of the unconsumed suffix
            span: Location of the final state
            position: Token offset where the valid prefix ended

        Returns:
            Diagnostic for LEFTOVER_INPUT
        """
        msg = f"leftover data after a valid node {_quote_found(found)}"
        return Diagnostic(
            code=DiagnosticCode.LEFTOVER_INPUT,
            message=msg,
            span=span,
            found=found,
            position=position,
            hint="Remove trailing content after the document",
        )

    @staticmethod
    def expectation_failed(
        expectation: str,
        found: str | None,
        *,
        span: SourceSpan | None = None,
        position: int | None = None,
    ) -> Diagnostic:
        """Mandatory construct missing at an escalation point.

        Args:
            expectation: Description of the construct the grammar required
            found: Rendering of the token found instead (None at end of input)
            span: Location of the failure
            position: Token offset of the failure

        Returns:
            Diagnostic for EXPECTATION_FAILED
        """
        if found is None:
            msg = f"{expectation} expected where {END_OF_INPUT} is"
        else:
            msg = f"{expectation} expected where {_quote_found(found)} is"
        return Diagnostic(
            code=DiagnosticCode.EXPECTATION_FAILED,
            message=msg,
            span=span,
            expected=(expectation,),
            found=found,
            position=position,
        )

    @staticmethod
    def no_progress(
        *,
        span: SourceSpan | None = None,
        position: int | None = None,
    ) -> Diagnostic:
        """Repeated sub-rule matched without changing the parse state.

        Args:
            span: Location where the repetition stalled
            position: Token offset where the repetition stalled

        Returns:
            Diagnostic for NO_PROGRESS
        """
        if position is None:
            msg = "Repeated rule matched without consuming input"
        else:
            msg = f"Repeated rule matched without consuming input at position {position}"
        return Diagnostic(
            code=DiagnosticCode.NO_PROGRESS,
            message=msg,
            span=span,
            position=position,
            hint="Rules passed to repeat_zero_or_more/repeat_one_or_more must consume "
            "at least one token or change the context on every match",
        )

    @staticmethod
    def nesting_depth_exceeded(
        max_depth: int,
        *,
        span: SourceSpan | None = None,
        position: int | None = None,
    ) -> Diagnostic:
        """Grammar nesting exceeded the configured limit.

        Args:
            max_depth: Configured maximum nesting depth
            span: Location of the construct that crossed the limit
            position: Token offset of that construct

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=span,
            position=position,
            hint="Flatten the document or raise max_nesting_depth",
        )

    @staticmethod
    def source_too_large(size: int, max_size: int) -> Diagnostic:
        """Input exceeded the configured size limit.

        Args:
            size: Size of the rejected input
            max_size: Configured maximum size

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Source size ({size} characters) exceeds maximum ({max_size} characters)"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Split the input or raise max_source_size",
        )

    @staticmethod
    def number_too_large(
        digits: int,
        max_digits: int,
        *,
        span: SourceSpan | None = None,
        position: int | None = None,
    ) -> Diagnostic:
        """Integer literal longer than the interpreter converts.

        Args:
            digits: Number of digits in the literal
            max_digits: Interpreter limit (sys.get_int_max_str_digits())
            span: Location of the literal
            position: Token offset of the literal

        Returns:
            Diagnostic for NUMBER_TOO_LARGE
        """
        msg = f"Integer literal has {digits} digits, exceeding the limit of {max_digits}"
        return Diagnostic(
            code=DiagnosticCode.NUMBER_TOO_LARGE,
            message=msg,
            span=span,
            position=position,
            hint="Raise the limit with sys.set_int_max_str_digits()",
        )
