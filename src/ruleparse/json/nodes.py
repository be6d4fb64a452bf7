"""JSON document nodes.

The grammar produces a small closed tree: every node is a ``Scalar``, an
``Array`` or an ``Object``. ``represent`` converts a tree into native Python
values with an exhaustive match over the three node types.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Array", "JSONValue", "Node", "Object", "Scalar", "represent"]

type JSONValue = None | bool | int | float | str | list[JSONValue] | dict[str, JSONValue]


@dataclass(frozen=True, slots=True)
class Scalar:
    """String, number, boolean, or null."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class Array:
    """Ordered sequence of nodes."""

    items: tuple["Node", ...] = ()


@dataclass(frozen=True, slots=True)
class Object:
    """Key/value entries in document order.

    Duplicate keys are kept here; ``represent`` lets the last one win, like
    the standard library decoder.
    """

    entries: tuple[tuple[str, "Node"], ...] = ()


type Node = Scalar | Array | Object


def represent(node: Node) -> JSONValue:
    """Convert a node tree into native values (dict, list, str, int, float, bool, None).

    Example:
        >>> represent(Object((("a", Array((Scalar(1), Scalar(None)))),)))
        {'a': [1, None]}
    """
    match node:
        case Scalar(value=value):
            return value
        case Array(items=items):
            return [represent(item) for item in items]
        case Object(entries=entries):
            return {key: represent(value) for key, value in entries}
