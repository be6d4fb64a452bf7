"""JSON documents parsed with the combinator engine.

Public API:
    loads - Parse JSON text into native Python values
    parse - Parse JSON text into a Scalar/Array/Object node tree
    represent - Convert a node tree into native values
    JSONParser - Parser with configurable size and nesting limits
    JSONSyntaxError - Raised for malformed documents
"""

from .grammar import DocumentContext, build_json_rule
from .loader import JSONParser, JSONSyntaxError, loads, parse
from .nodes import Array, JSONValue, Node, Object, Scalar, represent

__all__ = [
    "Array",
    "DocumentContext",
    "JSONParser",
    "JSONSyntaxError",
    "JSONValue",
    "Node",
    "Object",
    "Scalar",
    "build_json_rule",
    "loads",
    "parse",
    "represent",
]
