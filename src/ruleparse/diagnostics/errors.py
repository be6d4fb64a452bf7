"""ruleparse exception hierarchy with structured diagnostics.

Combinators never raise for grammar failures; they return ``None`` or a
``HardFailure`` value. These exceptions exist for the caller-facing edge:
``Outcome.unwrap()``, ``rule_match()``, and grammar entry points such as
``ruleparse.json.loads()``.

Python 3.13+. Zero external dependencies.
"""

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from ruleparse.engine.state import ParseError

__all__ = ["RuleError", "RuleSyntaxError"]


class RuleError(Exception):
    """Base exception for all ruleparse errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize RuleError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class RuleSyntaxError(RuleError):
    """Input rejected by a grammar.

    Raised when a driver outcome other than success is surfaced to the
    caller: the root rule never matched, matched only a prefix, or an
    escalated failure unwound to the top.

    Attributes:
        error: The escalated ParseError, when the failure was escalated
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        error: "ParseError | None" = None,
    ) -> None:
        """Initialize RuleSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            error: Escalated ParseError that caused this exception (optional)
        """
        super().__init__(message)
        self.error = error
