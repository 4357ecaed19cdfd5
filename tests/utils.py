# tests/utils.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from deepclone import Ref, Variant, uncloned_field
from deepclone.core.records import record_fields
from deepclone.core.shapes import Shape, classify, has_record_state, value_base


# -----------------------------------------------------------------------------
# SAMPLE TYPES
# -----------------------------------------------------------------------------


@dataclass
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class FrozenPoint:
    x: int
    y: int


@dataclass
class Pair:
    a: Optional[Ref] = None
    b: Optional[Ref] = None


@dataclass(eq=False)
class Node:
    name: str
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = None
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Cached:
    key: str
    cache: Dict[str, Any] = uncloned_field(default_factory=dict)
    hits: int = uncloned_field(default=0)


class Slotted:
    __slots__ = ("left", "right", "__secret")

    def __init__(self, left=None, right=None, secret=None):
        self.left = left
        self.right = right
        self.__secret = secret

    @property
    def secret(self):
        return self.__secret


class Plain:
    __clone_exclude__ = ("handle",)

    def __init__(self, **fields):
        self.__dict__.update(fields)


class Figure(Variant):
    """A polymorphic container used across the tests."""


def graph_equal(a: Any, b: Any) -> bool:
    """
    Structural equality over possibly cyclic graphs. Refs compare by referent,
    records by field values. A pair already under comparison is assumed equal,
    which is what makes cycles terminate.
    """
    return _graph_equal(a, b, set())


def _graph_equal(a: Any, b: Any, seen: Set[Tuple[int, int]]) -> bool:
    if type(a) is not type(b):
        return False
    if classify(a) in (Shape.ABSENT, Shape.SCALAR):
        return a == b
    key = (id(a), id(b))
    if key in seen:
        return True
    seen.add(key)

    if isinstance(a, Ref):
        return _graph_equal(a.value, b.value, seen)
    if isinstance(a, Variant):
        return _graph_equal(a.value, b.value, seen)
    if isinstance(a, (list, tuple, deque)):
        return len(a) == len(b) and all(_graph_equal(x, y, seen) for x, y in zip(a, b))
    if isinstance(a, dict):
        if a.keys() != b.keys():
            return False
        return all(_graph_equal(a[k], b[k], seen) for k in a)
    if isinstance(a, (set, frozenset, bytearray)):
        return a == b
    if has_record_state(a):
        if value_base(a) is not None and a != b:
            return False
        fields_a = record_fields(a)
        if fields_a != record_fields(b):
            return False
        return all(_graph_equal(getattr(a, n), getattr(b, n), seen) for n in fields_a)
    return a == b


def reachable_ids(value: Any) -> Set[int]:
    """Identities of every reference-typed object reachable from ``value``."""
    found: Set[int] = set()
    stack = [value]
    while stack:
        item = stack.pop()
        shape = classify(item)
        if shape in (Shape.ABSENT, Shape.SCALAR, Shape.UNCLONABLE):
            continue
        if shape in (Shape.ARRAY, Shape.VARIANT):
            stack.extend(item if shape is Shape.ARRAY else [item.value])
            continue
        if id(item) in found:
            continue
        found.add(id(item))
        if shape is Shape.REFERENCE:
            stack.append(item.value)
        elif shape is Shape.MAPPING:
            stack.extend(item.keys())
            stack.extend(item.values())
        elif shape is Shape.SEQUENCE and not isinstance(item, bytearray):
            stack.extend(item)
        elif shape is Shape.SET:
            stack.extend(item)
        elif shape is Shape.RECORD:
            stack.extend(getattr(item, n) for n in record_fields(item))
    return found
