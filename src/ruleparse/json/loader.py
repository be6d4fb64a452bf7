"""Load JSON documents from text.

``JSONParser`` owns a compiled root rule plus the input limits it enforces.
The module-level ``parse`` and ``loads`` use a shared default-configured
parser; rules are stateless, so sharing it across threads is safe.

Security:
    Includes configurable input size limit and nesting depth limit, so
    oversized or adversarially nested documents fail with a diagnostic
    instead of exhausting memory or the interpreter stack.
"""

import logging

from ruleparse.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from ruleparse.core import depth_clamp
from ruleparse.diagnostics import Diagnostic, ErrorTemplate, RuleSyntaxError
from ruleparse.engine import Escalated, ParseError, ParseState, Rule, Success, run_rule

from .grammar import DocumentContext, build_json_rule
from .nodes import JSONValue, Node, represent

__all__ = ["JSONParser", "JSONSyntaxError", "loads", "parse"]

logger = logging.getLogger(__name__)


class JSONSyntaxError(RuleSyntaxError):
    """Malformed JSON document.

    Attributes:
        line: Line of the error (1-indexed), when known
        column: Column of the error (1-indexed), when known
    """

    def __init__(self, message: str | Diagnostic, *, error: ParseError | None = None) -> None:
        """Initialize JSONSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            error: Escalated ParseError that caused this exception (optional)
        """
        super().__init__(message, error=error)
        span = self.diagnostic.span if self.diagnostic is not None else None
        self.line = span.line if span is not None else None
        self.column = span.column if span is not None else None


class JSONParser:
    """JSON parser built on the combinator engine.

    Attributes:
        max_source_size: Maximum allowed source size in characters (default: 10 MiB)
        max_nesting_depth: Maximum allowed array/object nesting (default: 100)
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size", "_rule")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        """Initialize parser with optional size and nesting depth limits.

        Args:
            max_source_size: Maximum source size in characters (default: 10 MiB).
                            Set to 0 to disable size limit (not recommended).
            max_nesting_depth: Maximum array/object nesting depth (default: 100).
                              Clamped against the interpreter recursion limit.
        """
        self._max_source_size = (
            max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        )
        self._max_nesting_depth = depth_clamp(
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )
        self._rule: Rule[Node] = build_json_rule(self._max_nesting_depth)

    @property
    def max_source_size(self) -> int:
        """Maximum allowed source size in characters."""
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum allowed array/object nesting depth."""
        return self._max_nesting_depth

    def parse(self, source: str) -> Node:
        """Parse JSON text into a node tree.

        Args:
            source: Complete JSON document

        Returns:
            Root node of the document

        Raises:
            JSONSyntaxError: If the document is malformed or exceeds a limit
        """
        if self._max_source_size and len(source) > self._max_source_size:
            raise JSONSyntaxError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size)
            )

        logger.debug("Parsing JSON document (%d characters)", len(source))
        try:
            outcome = run_rule(self._rule, ParseState(source, 0, DocumentContext()))
        except RecursionError:
            # Callers already deep in the stack can run out before the nesting check
            logger.warning(
                "Recursion limit reached before nesting depth %d", self._max_nesting_depth
            )
            raise JSONSyntaxError(
                ErrorTemplate.nesting_depth_exceeded(self._max_nesting_depth)
            ) from None

        match outcome:
            case Success(value=node):
                return node
            case Escalated(error=error):
                raise JSONSyntaxError(outcome.diagnostic, error=error)
            case _:
                raise JSONSyntaxError(outcome.diagnostic)

    def loads(self, source: str) -> JSONValue:
        """Parse JSON text into native values (dict, list, str, int, float, bool, None)."""
        return represent(self.parse(source))


_default_parser = JSONParser()


def parse(source: str) -> Node:
    """Parse JSON text into a node tree with the default limits."""
    return _default_parser.parse(source)


def loads(source: str) -> JSONValue:
    """Parse JSON text into native values with the default limits.

    Example:
        >>> loads('{"a": [1, 2.5, true, null]}')
        {'a': [1, 2.5, True, None]}
    """
    return _default_parser.loads(source)
