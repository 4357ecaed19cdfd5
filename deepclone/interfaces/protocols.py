# deepclone/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from deepclone.interfaces.types import TypeTag

if TYPE_CHECKING:
    from deepclone.core.session import CloneSession


@runtime_checkable
class SelfCloning(Protocol):
    """
    Protocol for types that fully own their cloning.

    Methods:
        __clone__(session): Returns a clone of the object.

    Runtime Invariants:
    - The dispatcher hands over all control; no structural cloning is applied.
    - Sub-objects should be cloned through ``session.clone`` so that the rest
      of the graph is still handled by the engine.

    Aliasing:
    - Objects cloned here are not entered into the visited registry unless the
      implementation calls ``session.remember``. Implementations that need
      cycle safety must register their own shell before recursing.
    """

    def __clone__(self, session: "CloneSession") -> Any:
        """Return an independent clone of this object."""
        ...


@runtime_checkable
class ExtensionCloner(Protocol):
    """
    Protocol for externally registered cloners.

    A plain callable ``(value, session) -> clone`` is accepted as well; objects
    implementing this protocol are adapted to that signature on registration.
    The same aliasing rules as SelfCloning apply.
    """

    def clone(self, value: Any, session: "CloneSession") -> Any:
        """Return an independent clone of ``value``."""
        ...


@runtime_checkable
class CloneObserver(Protocol):
    """
    Protocol for diagnostics sinks notified as cloning proceeds.

    Observers are never required for correctness and must not raise.
    """

    def record(self, tag: TypeTag) -> None:
        """Record that one value described by ``tag`` was cloned."""
        ...
