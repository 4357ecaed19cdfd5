"""
Core clone engine: shape taxonomy, registries, composite strategies, the
session/dispatcher and the public manager.
"""

from .containers import Ref, Variant
from .manager import CloneManager, clone_as, deep_clone
from .session import CloneSession, SessionStatus
from .shapes import Shape, classify

__all__ = [
    "Ref",
    "Variant",
    "CloneManager",
    "CloneSession",
    "SessionStatus",
    "Shape",
    "classify",
    "deep_clone",
    "clone_as",
]
