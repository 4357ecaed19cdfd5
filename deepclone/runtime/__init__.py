"""
Runtime support: locking helpers and the diagnostics tally.
"""

from .stats import CloneStats

__all__ = ["CloneStats"]
