"""Depth limit clamping for recursion protection.

Nested grammar constructs recurse through ordinary Python calls, so a
configured nesting limit is only meaningful while it stays below the
interpreter's recursion limit.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["depth_clamp"]

logger = logging.getLogger(__name__)

# Interpreter frames one level of grammar nesting may cost. The bundled JSON
# grammar needs at most six (a container inside a non-first array item or
# object entry); the rest covers the innermost scalar and the caller's stack.
FRAMES_PER_LEVEL: int = 8


def depth_clamp(
    requested_depth: int,
    *,
    frames_per_level: int = FRAMES_PER_LEVEL,
    reserve_frames: int = 50,
) -> int:
    """Clamp requested nesting depth against Python recursion limit.

    Validates requested depth against sys.getrecursionlimit() to prevent
    RecursionError on systems with constrained stack limits. Logs warning
    if clamping occurs.

    Args:
        requested_depth: Desired maximum nesting depth
        frames_per_level: Interpreter frames one nesting level costs
        reserve_frames: Stack frames to reserve for call overhead (default: 50)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)  # OK, 100 * 8 fits in 950 frames
        100
        >>> depth_clamp(500)  # Exceeds limit, clamped to 950 // 8
        118
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
