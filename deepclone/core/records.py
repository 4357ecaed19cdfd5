# deepclone/core/records.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Field discovery and the per-field writability contract for records.

A record field is cloned only when ``field_is_writable`` says so. Fields that
opt out, either through ``uncloned_field()`` on a dataclass or by being listed
in the class attribute ``__clone_exclude__``, are left at their zero value in
the clone: the declared dataclass default (or ``default_factory()``) when there
is one, otherwise None.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterator, List

from deepclone.core.shapes import value_base

CLONE_METADATA_KEY = "clone"

_SLOT_SKIP = ("__dict__", "__weakref__")


def uncloned_field(**kwargs: Any) -> Any:
    """
    Declare a dataclass field the clone engine must not copy.

    Accepts the same arguments as ``dataclasses.field``. The clone receives the
    field's default (or ``default_factory()``), or None if neither is given.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[CLONE_METADATA_KEY] = False
    return dataclasses.field(metadata=metadata, **kwargs)


def _slot_names(cls: type) -> Iterator[str]:
    for klass in cls.__mro__[:-1]:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in _SLOT_SKIP:
                continue
            # Private slot names are stored mangled
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            yield name


def record_fields(obj: Any) -> List[str]:
    """
    List the names of the fields stored on ``obj``.

    Dataclasses report their declared fields first, in declaration order.
    Instance ``__dict__`` entries follow, then slots that currently hold a value.
    """
    names: List[str] = []
    seen = set()

    def add(name: str) -> None:
        if name not in seen:
            seen.add(name)
            names.append(name)

    if dataclasses.is_dataclass(obj):
        for f in dataclasses.fields(obj):
            add(f.name)
    for name in getattr(obj, "__dict__", {}):
        add(name)
    for name in _slot_names(type(obj)):
        if hasattr(obj, name):
            add(name)
    return names


def _dataclass_field(cls: type, name: str):
    if not dataclasses.is_dataclass(cls):
        return None
    return cls.__dataclass_fields__.get(name)


def field_is_writable(cls: type, name: str) -> bool:
    """
    Capability check: may the clone engine copy field ``name`` of ``cls``?
    """
    if name in getattr(cls, "__clone_exclude__", ()):
        return False
    f = _dataclass_field(cls, name)
    if f is not None and f.metadata.get(CLONE_METADATA_KEY, True) is False:
        return False
    return True


def zero_value(cls: type, name: str) -> Any:
    """
    Return the value a non-writable field takes in a fresh clone.
    """
    f = _dataclass_field(cls, name)
    if f is not None:
        if f.default is not dataclasses.MISSING:
            return f.default
        if f.default_factory is not dataclasses.MISSING:
            return f.default_factory()
    return None


def new_record(cls: type) -> Any:
    """Allocate an instance of ``cls`` without running ``__init__``."""
    return cls.__new__(cls)


def allocate_record(src: Any) -> Any:
    """
    Allocate an empty record of the same type as ``src``, ready for its fields.

    Most records start from a bare ``__new__``. Two kinds keep part of their
    state outside ``__dict__``/``__slots__`` and get it at allocation time:
    subclasses of immutable builtins (``class Tag(str)``) are built around the
    source value, and exceptions receive their ``args``, which types such as
    OSError parse into C-level attributes.
    """
    cls = type(src)
    base = value_base(src)
    if base is not None:
        return base.__new__(cls, src)
    if isinstance(src, BaseException):
        return cls.__new__(cls, *src.args)
    return new_record(cls)


def set_field(obj: Any, name: str, value: Any) -> None:
    """
    Store ``value`` on ``obj`` bypassing ``__setattr__`` overrides, so that
    frozen dataclasses and read-only properties over slots do not block the
    clone from being populated.
    """
    object.__setattr__(obj, name, value)
