# deepclone/plugins/stdlib.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import array
import gc
import types
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from deepclone.core.manager import CloneManager
    from deepclone.core.session import CloneSession


def clone_array(value: array.array, session: "CloneSession") -> array.array:
    """
    Clone a typed array into a new buffer with the same typecode. Two places
    holding the same array object share the clone.
    """
    found, existing = session.lookup(value)
    if found:
        return existing
    clone = array.array(value.typecode, value)
    session.remember(value, clone)
    return clone


def clone_memoryview(value: memoryview, session: "CloneSession") -> memoryview:
    """
    Copy the viewed bytes into a fresh writable buffer and view it with the
    same format and shape.
    """
    found, existing = session.lookup(value)
    if found:
        return existing
    clone = memoryview(bytearray(value.tobytes()))
    if value.format != "B" or value.ndim != 1:
        clone = clone.cast(value.format, value.shape)
    session.remember(value, clone)
    return clone


def clone_mappingproxy(value: types.MappingProxyType, session: "CloneSession") -> types.MappingProxyType:
    """
    Build a read-only proxy over the clone of the proxied mapping.

    The backing mapping is cloned as itself, so other references to it share
    the clone, and a mapping that contains its own proxy terminates.
    """
    found, existing = session.lookup(value)
    if found:
        return existing
    backing = session.clone(gc.get_referents(value)[0])
    # Cloning the backing mapping may have reached this proxy again
    found, existing = session.lookup(value)
    if found:
        return existing
    clone = types.MappingProxyType(backing)
    session.remember(value, clone)
    return clone


STDLIB_CLONERS = {
    array.array: clone_array,
    memoryview: clone_memoryview,
    types.MappingProxyType: clone_mappingproxy,
}


def register_stdlib_cloners(manager: "CloneManager") -> "CloneManager":
    """
    Register extension cloners for standard library types that store data
    outside ``__dict__``/``__slots__`` and would otherwise be shared as opaque
    values.

    :return: The same manager, for chaining.
    """
    for cls, cloner in STDLIB_CLONERS.items():
        manager.register_cloner(cls, cloner)
    return manager
