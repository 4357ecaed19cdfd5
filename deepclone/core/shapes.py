# deepclone/core/shapes.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Closed classification of values into the shapes the clone engine knows how to
handle. Every value maps to exactly one Shape; the dispatcher owns one handler
per shape.
"""

from __future__ import annotations

import asyncio
import datetime
import decimal
import fractions
import functools
import io
import multiprocessing.connection
import multiprocessing.queues
import pathlib
import queue
import socket
import types
import uuid
from collections import deque
from enum import Enum
from typing import Any, Optional

from deepclone.core.containers import Ref, Variant


class Shape(Enum):
    """Structural kinds driving dispatch."""

    ABSENT = "absent"  # None
    SCALAR = "scalar"  # Immutable or opaque, returned as-is
    REFERENCE = "reference"  # Ref cell
    SEQUENCE = "sequence"  # list, bytearray, deque
    ARRAY = "array"  # tuple, frozenset
    MAPPING = "mapping"  # dict
    SET = "set"  # set
    RECORD = "record"  # Object with named fields
    VARIANT = "variant"  # Polymorphic container
    UNCLONABLE = "unclonable"  # Callables and channels


class UnclonableKind(Enum):
    """Kinds of values that are rejected rather than approximated."""

    CALLABLE = "callable"
    CHANNEL = "channel"


_SCALAR_TYPES = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    range,
    slice,
    type(Ellipsis),
    type(NotImplemented),
    Enum,
    type,
    types.ModuleType,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    decimal.Decimal,
    fractions.Fraction,
    uuid.UUID,
    pathlib.PurePath,
)

_CALLABLE_TYPES = (
    types.FunctionType,
    types.LambdaType,
    types.MethodType,
    types.BuiltinFunctionType,
    types.BuiltinMethodType,
    types.MethodWrapperType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.CodeType,
    types.FrameType,
    functools.partial,
    staticmethod,
    classmethod,
)

_CHANNEL_TYPES = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    multiprocessing.queues.Queue,
    multiprocessing.connection.Connection,
    socket.socket,
    io.IOBase,
)

# Immutable builtins whose subclasses may carry fields next to the value
_VALUE_TYPES = (int, float, complex, str, bytes, decimal.Decimal)

_SEQUENCE_TYPES = (list, bytearray, deque)
_ARRAY_TYPES = (tuple, frozenset)


def unclonable_kind(value: Any) -> Optional[UnclonableKind]:
    """
    Return the unclonable kind of ``value``, or None if it may be cloned.

    Classes are never reported as callables even though they can be called;
    they are shared by the clone like any other scalar.
    """
    if isinstance(value, type):
        return None
    if isinstance(value, _CALLABLE_TYPES):
        return UnclonableKind.CALLABLE
    if isinstance(value, _CHANNEL_TYPES):
        return UnclonableKind.CHANNEL
    return None


def has_record_state(value: Any) -> bool:
    """True if ``value`` stores named fields in ``__dict__`` or ``__slots__``."""
    if hasattr(value, "__dict__"):
        return True
    return any(getattr(klass, "__slots__", ()) for klass in type(value).__mro__[:-1])


def value_base(value: Any) -> Optional[type]:
    """
    Return the immutable builtin a subclass instance such as ``class Tag(str)``
    stores its value in, or None if ``value`` is not a stateful subclass of one.

    Exact builtins, bools and enum members are plain scalars and return None.
    """
    cls = type(value)
    if cls in _VALUE_TYPES or isinstance(value, Enum):
        return None
    for base in _VALUE_TYPES:
        if isinstance(value, base):
            return base if has_record_state(value) else None
    return None


def classify(value: Any) -> Shape:
    """
    Map ``value`` to its Shape.

    The order of checks matters: a ``str``/``int``/``bytes`` subclass that
    carries its own fields is a record, not a shared scalar. Scalars are
    recognised before other records (a class
    or a module has a ``__dict__``), and unclonable kinds before records (a
    function has one too). Engine containers are matched before the builtin
    collections they might subclass.
    """
    if value is None:
        return Shape.ABSENT
    if value_base(value) is not None:
        return Shape.RECORD
    if isinstance(value, _SCALAR_TYPES):
        return Shape.SCALAR
    if unclonable_kind(value) is not None:
        return Shape.UNCLONABLE
    if isinstance(value, Ref):
        return Shape.REFERENCE
    if isinstance(value, Variant):
        return Shape.VARIANT
    if isinstance(value, _SEQUENCE_TYPES):
        return Shape.SEQUENCE
    if isinstance(value, _ARRAY_TYPES):
        return Shape.ARRAY
    if isinstance(value, dict):
        return Shape.MAPPING
    if isinstance(value, set):
        return Shape.SET
    if has_record_state(value):
        return Shape.RECORD
    return Shape.SCALAR
