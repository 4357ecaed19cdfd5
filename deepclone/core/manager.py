# deepclone/core/manager.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import types
import typing
from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

from deepclone.core.errors import TypeMismatchError
from deepclone.core.registry import ExtensionRegistry
from deepclone.core.session import CloneSession
from deepclone.interfaces.protocols import CloneObserver

T = TypeVar("T")

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def _type_label(expected: Any) -> str:
    if isinstance(expected, type):
        return expected.__qualname__
    return repr(expected)


def _admits_none(expected: Any) -> bool:
    """True if ``expected`` is a type that can legitimately hold None."""
    if expected is Any or expected is object or expected is _NONE_TYPE or expected is None:
        return True
    if typing.get_origin(expected) in _UNION_ORIGINS:
        return any(_admits_none(arg) for arg in typing.get_args(expected))
    return False


def _runtime_types(expected: Any) -> Optional[Tuple[type, ...]]:
    """
    Reduce a type hint to the classes an isinstance check can use.

    Returns None when every value is acceptable (``Any``).
    """
    if expected is Any:
        return None
    if expected is None:
        return (_NONE_TYPE,)
    origin = typing.get_origin(expected)
    if origin in _UNION_ORIGINS:
        collected = []
        for arg in typing.get_args(expected):
            types_ = _runtime_types(arg)
            if types_ is None:
                return None
            collected.extend(types_)
        return tuple(collected)
    if origin is not None:
        return _runtime_types(origin)
    if isinstance(expected, type):
        return (expected,)
    raise TypeError(f"Cannot check clones against {expected!r}")


class CloneManager:
    """
    Entry point of the clone engine.

    The manager owns the extension registry and the session configuration; it
    holds no state between clone calls. Each call to ``clone`` runs in a fresh
    CloneSession, so a manager may be reused for any number of clones.

    Register extension cloners before cloning. Registration while a clone is
    running raises RegistrationError.
    """

    def __init__(
        self,
        cloners: Optional[Dict[type, Any]] = None,
        observer: Optional[CloneObserver] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """
        :param cloners: Initial extension registrations, type -> cloner.
        :param observer: Optional diagnostics sink, e.g. a CloneStats.
        :param max_depth: Optional bound on the nesting depth of cloned graphs.
        """
        self._extensions = ExtensionRegistry()
        self._observer = observer
        self._max_depth = max_depth
        for cls, cloner in (cloners or {}).items():
            self._extensions.register(cls, cloner)

    @property
    def extensions(self) -> ExtensionRegistry:
        return self._extensions

    @property
    def observer(self) -> Optional[CloneObserver]:
        return self._observer

    def register_cloner(self, cls: type, cloner: Any) -> None:
        """
        Use ``cloner`` instead of structural cloning for values of exactly ``cls``.

        :param cls: The concrete type handled by the cloner.
        :param cloner: Callable ``(value, session) -> clone`` or an ExtensionCloner.
        """
        self._extensions.register(cls, cloner)

    def new_session(self) -> CloneSession:
        """Create a fresh, single-use session bound to this manager's configuration."""
        return CloneSession(self._extensions, observer=self._observer, max_depth=self._max_depth)

    def clone(self, value: T) -> T:
        """
        Deep-clone ``value``. None clones to None.

        :raises CloneError: If any part of the graph cannot be cloned.
        """
        return self.new_session().run(value)

    def clone_as(self, value: Any, expected_type: Type[T]) -> T:
        """
        Deep-clone ``value`` and check the clone against ``expected_type``.

        A None input is accepted only when ``expected_type`` admits None
        (``Optional[...]``, a Union with None, ``Any`` or ``object``); for any
        other expected type it is rejected before cloning.

        :raises TypeMismatchError: If the result cannot be viewed as ``expected_type``.
        """
        if value is None:
            if _admits_none(expected_type):
                return None
            raise TypeMismatchError(_type_label(expected_type), _NONE_TYPE.__qualname__)

        runtime_types = _runtime_types(expected_type)
        result = self.clone(value)
        if runtime_types is not None and not isinstance(result, runtime_types):
            raise TypeMismatchError(_type_label(expected_type), type(result).__qualname__)
        return result


def deep_clone(value: T, **options: Any) -> T:
    """
    Deep-clone ``value`` with a fresh CloneManager.

    :param options: Keyword arguments for CloneManager.
    """
    return CloneManager(**options).clone(value)


def clone_as(value: Any, expected_type: Type[T], **options: Any) -> T:
    """
    Typed deep clone with a fresh CloneManager. See CloneManager.clone_as.
    """
    return CloneManager(**options).clone_as(value, expected_type)
