"""
CyberSecure Toolkit Math Utilities
===================================

Small numeric helpers shared by the scorers.

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017), Appendix A: Strength of Memorized Secrets.
"""

from __future__ import annotations

import math


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    """Clamp *value* into the closed interval ``[low, high]``."""
    return max(low, min(value, high))


def combinatorial_entropy(length: int, pool_size: int) -> float:
    """Entropy in bits of a uniformly random string: ``length * log2(pool)``.

    Returns 0.0 for an empty string or an empty pool instead of the
    ``-inf`` that ``log2(0)`` would produce.

    >>> combinatorial_entropy(8, 2)
    8.0
    """
    if length <= 0 or pool_size <= 0:
        return 0.0
    return length * math.log2(pool_size)
