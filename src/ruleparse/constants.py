"""Shared constants for ruleparse.

Centralized configuration constants used by the engine and the bundled
grammars. Placing constants here avoids circular imports and provides a
single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for nested grammar constructs
- Input limits: DoS prevention via size constraints
- Rendering: Bounds on how much input is echoed back in error messages

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Rendering
    "MAX_FOUND_PREVIEW",
    "END_OF_INPUT",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Rules recurse into sub-rules through ordinary Python calls, so every level of
# grammar nesting costs several interpreter frames. Grammars that nest (arrays
# inside arrays, objects inside objects) track their depth in the parse
# context and escalate once MAX_DEPTH is reached, well before RecursionError.
#
# Default recursion limit is 1000 frames; a nested JSON value costs at most
# six frames per level, so 100 levels leaves ample margin.

MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in characters (10 MiB).
# Prevents unbounded memory use from materializing huge token sequences.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# RENDERING
# ============================================================================

# Maximum number of remaining tokens echoed back in "found ..." messages.
MAX_FOUND_PREVIEW: int = 20

# Placeholder rendered when an error occurs at the end of the token sequence.
END_OF_INPUT: str = "the end of input"
