"""
Optional extension cloners.
"""

from .stdlib import STDLIB_CLONERS, register_stdlib_cloners

__all__ = ["STDLIB_CLONERS", "register_stdlib_cloners"]
