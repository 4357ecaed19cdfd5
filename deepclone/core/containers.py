# deepclone/core/containers.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """
    A single mutable reference cell.

    Two places in a graph holding the same Ref share the referent: writing
    ``ref.value`` through one is visible through the other. The clone engine
    preserves this sharing, and a Ref may point (directly or indirectly) back
    to itself.

    Like a pointer, a Ref compares equal only to itself; compare referents with
    ``a.value == b.value``.
    """

    __slots__ = ("value", "__weakref__")

    def __init__(self, value: Optional[T] = None) -> None:
        self.value = value

    def get(self) -> Optional[T]:
        """Return the referent."""
        return self.value

    def set(self, value: Optional[T]) -> None:
        """Point this reference at ``value``."""
        self.value = value

    def __repr__(self) -> str:
        if self.value is self:
            return "Ref(<self>)"
        return f"Ref({self.value!r})"


class Variant:
    """
    A polymorphic container holding one concrete value of varying type.

    Subclass Variant to name a container type (``class Shape(Variant): ...``).
    Cloning is transparent: the held value is cloned and re-wrapped in the same
    container type. A variant holding nothing is absent and clones to None.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None) -> None:
        self.value = value

    @property
    def is_empty(self) -> bool:
        """True when the variant holds no value."""
        return self.value is None

    def unwrap(self) -> Any:
        """Return the held value."""
        return self.value

    @classmethod
    def wrap(cls, value: Any) -> "Variant":
        """Build a container of this type around ``value``."""
        return cls(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variant):
            return NotImplemented
        return type(self) is type(other) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self), self.value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"
