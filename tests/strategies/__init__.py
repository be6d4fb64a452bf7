"""Hypothesis strategies for ruleparse property-based testing.

Strategies are organized by domain:

- tokens: Token sequences and rule inputs for combinator laws
- documents: JSON values and serialized JSON documents

Usage:
    from tests.strategies import json_documents, token_texts
    from tests.strategies.documents import json_values

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - json_values_by_shape, json_documents
"""

from .documents import (
    json_documents,
    json_scalars,
    json_values,
    json_values_by_shape,
    malformed_json_documents,
)
from .tokens import alphabet_texts, token_texts

__all__ = [
    "alphabet_texts",
    "json_documents",
    "json_scalars",
    "json_values",
    "json_values_by_shape",
    "malformed_json_documents",
    "token_texts",
]
