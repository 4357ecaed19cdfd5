# deepclone/core/session.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Optional

from deepclone.core.cloners import HANDLERS
from deepclone.core.errors import CloneDepthError, CloneError, ExtensionError, SessionError
from deepclone.core.registry import ExtensionRegistry, VisitedRegistry
from deepclone.core.shapes import Shape, classify
from deepclone.interfaces.protocols import CloneObserver, SelfCloning
from deepclone.interfaces.types import Lookup, TypeTag

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Lifecycle of a clone session."""

    ACTIVE = auto()  # Accepting clone calls
    COMPLETED = auto()  # Top-level clone returned
    FAILED = auto()  # Top-level clone raised; registry contents are unusable


class CloneSession:
    """
    State for a single top-level clone: the visited registry, the (read-only)
    extension registry, and an optional diagnostics observer.

    The session is also the dispatcher. ``clone`` decides, per value, whether to
    hand over to the value's own ``__clone__``, to a registered extension
    cloner, or to the structural strategy for the value's shape.

    A session is single-use and not thread-safe: create one per top-level call
    and never share it between concurrently running calls.
    """

    def __init__(
        self,
        extensions: Optional[ExtensionRegistry] = None,
        observer: Optional[CloneObserver] = None,
        max_depth: Optional[int] = None,
    ) -> None:
        """
        :param extensions: Registry of cloners for specific types.
        :param observer: Optional sink notified with a tag for each cloned composite.
        :param max_depth: Optional bound on the nesting depth of the traversal.
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be a positive integer")
        self._extensions = extensions if extensions is not None else ExtensionRegistry()
        self._observer = observer
        self._max_depth = max_depth
        self._visited = VisitedRegistry()
        self._status = SessionStatus.ACTIVE
        self._depth = 0
        self._started = False

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def visited(self) -> VisitedRegistry:
        """The identity-to-clone registry shared by every strategy in this session."""
        return self._visited

    @property
    def depth(self) -> int:
        """Current nesting depth of the traversal."""
        return self._depth

    def lookup(self, source: Any) -> Lookup:
        """
        Opt-in aliasing for extension and self-cloning code.

        :return: ``(True, clone)`` if ``source`` was already cloned in this session.
        """
        return self._visited.lookup(source)

    def remember(self, source: Any, clone: Any) -> None:
        """
        Register ``clone`` for ``source``. Call before cloning the contents of
        ``clone`` to make a custom cloner cycle-safe.
        """
        self._visited.remember(source, clone)

    def report(self, tag: TypeTag) -> None:
        """Forward a diagnostics tag to the observer, if one is attached."""
        if self._observer is not None:
            self._observer.record(tag)

    def run(self, value: Any) -> Any:
        """
        Clone ``value`` as the top-level call of this session.

        On success the session is COMPLETED; on any failure it is FAILED and
        the exception propagates. Either way the session cannot be used again.
        A failure that a custom cloner caught and swallowed still fails the
        whole call: no partial clone is returned.

        :raises SessionError: If the session has already run.
        """
        if self._started:
            raise SessionError("Clone session has already been used; start a new session")
        self._started = True

        self._extensions.acquire()
        logger.debug("Clone session started")
        try:
            result = self.clone(value)
            if self._status is SessionStatus.FAILED:
                raise SessionError("A nested clone failed; no partial clone is returned")
        except Exception as error:
            self._status = SessionStatus.FAILED
            logger.debug("Clone session failed after %d objects: %s", len(self._visited), error)
            raise
        finally:
            self._extensions.release()

        self._status = SessionStatus.COMPLETED
        logger.debug("Clone session completed with %d visited objects", len(self._visited))
        return result

    def clone(self, value: Any) -> Any:
        """
        Clone any value, recursing through this session.

        Priority order: self-cloning, then an extension cloner for the exact
        type, then the structural strategy for the value's shape. Unclonable
        kinds raise UnclonableKindError. None clones to None.

        Any failure marks the session FAILED.
        """
        if self._status is not SessionStatus.ACTIVE:
            raise SessionError(
                f"Clone session is {self._status.name.lower()}; start a new session",
                {"status": self._status.name},
            )
        if value is None:
            return None

        if self._max_depth is not None and self._depth >= self._max_depth:
            self._status = SessionStatus.FAILED
            raise CloneDepthError(self._max_depth)

        self._depth += 1
        try:
            return self._dispatch(value)
        except RecursionError:
            self._status = SessionStatus.FAILED
            raise CloneDepthError(self._max_depth) from None
        except Exception:
            self._status = SessionStatus.FAILED
            raise
        finally:
            self._depth -= 1

    def _dispatch(self, value: Any) -> Any:
        cls = type(value)

        if not isinstance(value, type) and isinstance(value, SelfCloning):
            return self._call_extension(cls, value.__clone__, self)

        cloner = self._extensions.get(cls)
        if cloner is not None:
            return self._call_extension(cls, cloner, value, self)

        shape = classify(value)
        if shape is Shape.ABSENT:
            return None
        return HANDLERS[shape](self, value)

    @staticmethod
    def _call_extension(cls: type, fn: Any, *args: Any) -> Any:
        try:
            return fn(*args)
        except (CloneError, RecursionError):
            raise
        except Exception as e:
            raise ExtensionError(cls.__qualname__, str(e)) from e
