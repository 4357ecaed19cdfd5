# deepclone/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import Any, Dict, Optional


class CloneError(Exception):
    """
    Base exception class for errors raised while cloning a value graph.

    Every error carries a ``details`` dict with structured context about the
    failure, in addition to the human-readable message.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.details: Dict[str, Any] = details or {}


class UnclonableKindError(CloneError):
    """
    Raised when the traversal reaches a value that is deliberately never cloned:
    executable/callable values and communication channels.
    """

    def __init__(self, kind: str, type_name: str) -> None:
        super().__init__(f"{kind} values cannot be cloned: {type_name}", {"kind": kind, "type": type_name})
        self.kind = kind
        self.type_name = type_name


class TypeMismatchError(CloneError):
    """
    Raised by the typed entry point when a clone cannot be viewed as the
    caller's expected type.
    """

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"cloned value of type {actual} is not an instance of {expected}",
            {"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class RegistrationError(CloneError):
    """
    Raised when an extension cloner cannot be registered.
    """


class SessionError(CloneError):
    """
    Raised when a clone session is used after it has completed or failed.
    """


class CloneDepthError(CloneError):
    """
    Raised when the source graph is nested deeper than the session allows.
    """

    def __init__(self, max_depth: Optional[int]) -> None:
        super().__init__(f"Clone depth limit exceeded (max_depth={max_depth})", {"max_depth": max_depth})
        self.max_depth = max_depth


class ExtensionError(CloneError):
    """
    Raised when an extension cloner or a self-cloning object fails with an
    exception that is not a CloneError. The original exception is chained.
    """

    def __init__(self, type_name: str, reason: str) -> None:
        super().__init__(f"Cloner for {type_name} failed: {reason}", {"type": type_name})
        self.type_name = type_name
