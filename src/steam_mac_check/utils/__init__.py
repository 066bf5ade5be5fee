"""
Utility modules.

Provides the concurrency limiter used to bound probe fan-out.
"""

from steam_mac_check.utils.concurrency import ConcurrencyLimiter

__all__ = [
    "ConcurrencyLimiter",
]
