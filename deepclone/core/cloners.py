# deepclone/core/cloners.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
One cloning strategy per structural shape.

Every reference-typed strategy (reference, sequence, mapping, set, record)
follows the same protocol: probe the visited registry and return the existing
clone on a hit; otherwise allocate an empty shell, register it, and only then
recurse into the contents. Registering before recursing is what lets a value
that refers to itself terminate, and it is what makes two paths to the same
source object lead to the same clone.
"""

from __future__ import annotations

from collections import Counter, OrderedDict, defaultdict, deque
from typing import TYPE_CHECKING, Any

from deepclone.core.containers import Ref, Variant
from deepclone.core.errors import UnclonableKindError
from deepclone.core.records import allocate_record, field_is_writable, record_fields, set_field, zero_value
from deepclone.core.shapes import Shape, has_record_state, unclonable_kind

if TYPE_CHECKING:
    from deepclone.core.session import CloneSession

_MISSING = object()
_PLAIN_MAPPINGS = (dict, OrderedDict, Counter, defaultdict)


def _type_name(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def clone_scalar(session: "CloneSession", src: Any) -> Any:
    """Scalars and opaque values carry no references and are shared as-is."""
    return src


def reject(session: "CloneSession", src: Any) -> Any:
    """Fail on a value that must never be cloned."""
    kind = unclonable_kind(src)
    raise UnclonableKindError(kind.value if kind else "unclonable", _type_name(src))


def clone_reference(session: "CloneSession", src: Ref) -> Ref:
    found, existing = session.visited.lookup(src)
    if found:
        return existing

    clone = type(src).__new__(type(src))
    clone.value = None
    session.visited.remember(src, clone)
    clone.value = session.clone(src.value)
    session.report(Shape.REFERENCE.value)
    return clone


def _clone_instance_fields(session: "CloneSession", src: Any, clone: Any) -> None:
    cls = type(src)
    for name in record_fields(src):
        if not field_is_writable(cls, name):
            set_field(clone, name, zero_value(cls, name))
            continue
        value = getattr(src, name, _MISSING)
        if value is _MISSING:
            continue
        set_field(clone, name, session.clone(value))


def _clone_exception_state(session: "CloneSession", src: BaseException, clone: BaseException) -> None:
    # Tracebacks hold frames and are not carried over
    clone.args = session.clone(src.args)
    clone.__cause__ = session.clone(src.__cause__)
    clone.__context__ = session.clone(src.__context__)
    clone.__suppress_context__ = src.__suppress_context__


def clone_sequence(session: "CloneSession", src: Any) -> Any:
    found, existing = session.visited.lookup(src)
    if found:
        return existing

    cls = type(src)
    clone = cls.__new__(cls)
    if isinstance(src, deque):
        deque.__init__(clone, (), src.maxlen)
    session.visited.remember(src, clone)
    # Subclass fields first: an overridden append may rely on them
    if has_record_state(src):
        _clone_instance_fields(session, src, clone)
    if isinstance(src, bytearray):
        clone.extend(src)
    else:
        for item in src:
            clone.append(session.clone(item))
    session.report(Shape.SEQUENCE.value)
    return clone


def clone_array(session: "CloneSession", src: Any) -> Any:
    """
    Rebuild a tuple or frozenset from clones of its items.

    Arrays have no identity: they are never registered, so each occurrence is
    rebuilt. A cycle that passes through an array therefore comes back with a
    fresh copy of the array wherever the cycle re-enters it.
    """
    items = [session.clone(item) for item in src]
    cls = type(src)
    if cls is tuple or cls is frozenset:
        return _report_array(session, cls(items))
    if isinstance(src, tuple) and hasattr(cls, "_make"):
        clone = cls._make(items)
    elif isinstance(src, tuple):
        clone = tuple.__new__(cls, items)
    else:
        clone = frozenset.__new__(cls, items)
    if has_record_state(src):
        _clone_instance_fields(session, src, clone)
    return _report_array(session, clone)


def _report_array(session: "CloneSession", clone: Any) -> Any:
    session.report(Shape.ARRAY.value)
    return clone


def clone_mapping(session: "CloneSession", src: dict) -> dict:
    found, existing = session.visited.lookup(src)
    if found:
        return existing

    cls = type(src)
    clone = cls() if cls in _PLAIN_MAPPINGS else cls.__new__(cls)
    if isinstance(src, defaultdict):
        # The factory is callable and is shared, not cloned
        clone.default_factory = src.default_factory
    session.visited.remember(src, clone)
    # Subclass fields first: an overridden __setitem__ may rely on them
    if has_record_state(src):
        _clone_instance_fields(session, src, clone)
    for key, value in src.items():
        clone[session.clone(key)] = session.clone(value)
    session.report(Shape.MAPPING.value)
    return clone


def clone_set(session: "CloneSession", src: set) -> set:
    found, existing = session.visited.lookup(src)
    if found:
        return existing

    cls = type(src)
    clone = cls.__new__(cls)
    session.visited.remember(src, clone)
    if has_record_state(src):
        _clone_instance_fields(session, src, clone)
    for item in src:
        clone.add(session.clone(item))
    session.report(Shape.SET.value)
    return clone


def clone_record(session: "CloneSession", src: Any) -> Any:
    found, existing = session.visited.lookup(src)
    if found:
        return existing

    clone = allocate_record(src)
    session.visited.remember(src, clone)
    if isinstance(src, BaseException):
        _clone_exception_state(session, src, clone)
    _clone_instance_fields(session, src, clone)
    session.report(f"{Shape.RECORD.value} {_type_name(src)}")
    return clone


def clone_variant(session: "CloneSession", src: Variant) -> Any:
    if src.value is None:
        return None
    inner = session.clone(src.value)
    session.report(f"{Shape.VARIANT.value} {_type_name(src)}")
    return type(src).wrap(inner)


HANDLERS = {
    Shape.SCALAR: clone_scalar,
    Shape.REFERENCE: clone_reference,
    Shape.SEQUENCE: clone_sequence,
    Shape.ARRAY: clone_array,
    Shape.MAPPING: clone_mapping,
    Shape.SET: clone_set,
    Shape.RECORD: clone_record,
    Shape.VARIANT: clone_variant,
    Shape.UNCLONABLE: reject,
}
