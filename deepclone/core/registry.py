# deepclone/core/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from deepclone.core.errors import RegistrationError
from deepclone.interfaces.protocols import ExtensionCloner
from deepclone.interfaces.types import CloneFunction, Lookup
from deepclone.runtime.concurrency import get_lock, with_lock

logger = logging.getLogger(__name__)


class VisitedRegistry:
    """
    Session-scoped mapping from a source object's identity to its clone.

    Entries are keyed by ``id(source)`` and keep a strong reference to the
    source, so an id cannot be recycled by another object while the session is
    alive. Entries are never removed.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Any, Any]] = {}

    def lookup(self, source: Any) -> Lookup:
        """
        Return ``(True, clone)`` if ``source`` was already cloned, else ``(False, None)``.
        """
        entry = self._entries.get(id(source))
        if entry is None:
            return False, None
        return True, entry[1]

    def remember(self, source: Any, clone: Any) -> None:
        """
        Record ``clone`` as the clone of ``source``. Must be called before the
        clone's contents are populated.
        """
        self._entries[id(source)] = (source, clone)

    def __contains__(self, source: Any) -> bool:
        return id(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class _ClonerAdapter:
    """
    Internal adapter giving an ExtensionCloner object the plain
    ``(value, session)`` call signature.
    """

    def __init__(self, cloner: ExtensionCloner) -> None:
        self._cloner = cloner

    def __call__(self, value: Any, session: Any) -> Any:
        return self._cloner.clone(value, session)


class ExtensionRegistry:
    """
    Mapping from a concrete type to the cloner that replaces structural cloning
    for values of exactly that type (subclasses are not matched).

    Registration is lock-protected and closed while any session created from
    this registry is active: the mapping is read-only during cloning.
    """

    def __init__(self) -> None:
        self._cloners: Dict[type, CloneFunction] = {}
        self._lock = get_lock()
        self._active_sessions = 0

    def register(self, cls: type, cloner: Any) -> None:
        """
        Associate ``cls`` with ``cloner``, replacing any previous registration.

        :param cls: The exact type the cloner handles.
        :param cloner: A callable ``(value, session) -> clone`` or an ExtensionCloner.
        :raises RegistrationError: If the arguments are invalid or a session is active.
        """
        if not isinstance(cls, type):
            raise RegistrationError(f"Cloners are registered for types, got {cls!r}", {"type": repr(cls)})
        if isinstance(cloner, ExtensionCloner) and not isinstance(cloner, type):
            fn: CloneFunction = _ClonerAdapter(cloner)
        elif callable(cloner):
            fn = cloner
        else:
            raise RegistrationError(
                f"Cloner for {cls.__qualname__} must be callable or implement clone(value, session)",
                {"type": cls.__qualname__},
            )

        with with_lock(self._lock):
            if self._active_sessions:
                raise RegistrationError(
                    f"Cannot register a cloner for {cls.__qualname__} while cloning is in progress",
                    {"type": cls.__qualname__, "active_sessions": self._active_sessions},
                )
            self._cloners[cls] = fn
        logger.debug("Registered extension cloner for %s", cls.__qualname__)

    def get(self, cls: type) -> Optional[CloneFunction]:
        """Return the cloner registered for exactly ``cls``, if any."""
        return self._cloners.get(cls)

    def acquire(self) -> None:
        """Mark a session as active, closing registration."""
        with with_lock(self._lock):
            self._active_sessions += 1

    def release(self) -> None:
        """Mark a session as finished."""
        with with_lock(self._lock):
            self._active_sessions -= 1

    @property
    def active_sessions(self) -> int:
        return self._active_sessions

    def __contains__(self, cls: type) -> bool:
        return cls in self._cloners

    def __len__(self) -> int:
        return len(self._cloners)
