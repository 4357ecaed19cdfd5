"""
Protocols and type aliases shared by the engine and its extensions.
"""

from .protocols import CloneObserver, ExtensionCloner, SelfCloning

__all__ = ["CloneObserver", "ExtensionCloner", "SelfCloning"]
