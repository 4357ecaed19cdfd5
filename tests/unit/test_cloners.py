# tests/unit/test_cloners.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from collections import Counter, OrderedDict, defaultdict, deque, namedtuple

import pytest

from deepclone import Ref
from deepclone.core.cloners import (
    HANDLERS,
    clone_array,
    clone_mapping,
    clone_record,
    clone_reference,
    clone_sequence,
    clone_set,
    clone_variant,
    reject,
)
from deepclone.core.errors import UnclonableKindError
from deepclone.core.shapes import Shape
from tests.utils import Cached, Figure, FrozenPoint, Node, Plain, Point, Slotted

Coord = namedtuple("Coord", "x y")


class TaggedList(list):
    pass


class TaggedDict(dict):
    pass


class LoggedDict(dict):
    """Writes go through state created in __init__."""

    def __init__(self, *args, **kwargs):
        self.log = []
        super().__init__(*args, **kwargs)

    def __setitem__(self, key, value):
        self.log.append(key)
        super().__setitem__(key, value)


class LoggedList(list):
    def __init__(self, *args):
        self.log = []
        super().__init__(*args)

    def append(self, item):
        self.log.append(item)
        super().append(item)


class SlotList(list):
    __slots__ = ("tag",)


class TagSet(set):
    pass


class Span(tuple):
    def __new__(cls, start, end):
        return super().__new__(cls, (start, end))


class TagFrozenSet(frozenset):
    pass


class Label(str):
    pass


class Measured(float):
    __slots__ = ("unit",)


class LookupFailed(Exception):
    def __init__(self, key):
        super().__init__(f"missing {key!r}")
        self.key = key


def test_handlers_cover_every_non_absent_shape():
    assert set(HANDLERS) == set(Shape) - {Shape.ABSENT}


# -----------------------------------------------------------------------------
# REFERENCE
# -----------------------------------------------------------------------------


def test_clone_reference(session):
    src = Ref([1, 2])
    clone = clone_reference(session, src)
    assert clone is not src
    assert clone.value == [1, 2]
    assert clone.value is not src.value


def test_clone_reference_registers_before_referent(session):
    src = Ref()
    src.value = src
    clone = clone_reference(session, src)
    assert clone.value is clone


def test_clone_reference_returns_existing_clone(session):
    src = Ref(1)
    assert clone_reference(session, src) is clone_reference(session, src)


# -----------------------------------------------------------------------------
# SEQUENCE
# -----------------------------------------------------------------------------


def test_clone_list(session):
    src = [1, [2, 3], "x"]
    clone = clone_sequence(session, src)
    assert clone == src
    assert clone is not src
    assert clone[1] is not src[1]


def test_clone_list_self_reference(session):
    src = [1]
    src.append(src)
    clone = clone_sequence(session, src)
    assert clone[0] == 1
    assert clone[1] is clone


def test_clone_list_subclass_keeps_type_and_attributes(session):
    src = TaggedList([1, 2])
    src.tag = ["a"]
    clone = clone_sequence(session, src)
    assert type(clone) is TaggedList
    assert clone == [1, 2]
    assert clone.tag == ["a"]
    assert clone.tag is not src.tag


def test_clone_deque_keeps_maxlen(session):
    src = deque([1, 2, 3], maxlen=3)
    clone = clone_sequence(session, src)
    assert clone == src
    assert clone.maxlen == 3


def test_clone_bytearray(session):
    src = bytearray(b"abc")
    clone = clone_sequence(session, src)
    assert clone == src
    clone[0] = 0
    assert src == bytearray(b"abc")


def test_clone_list_subclass_fields_set_before_items(session):
    src = LoggedList([1, 2])
    clone = clone_sequence(session, src)
    assert clone == [1, 2]
    assert clone.log == [1, 2]
    assert src.log == []


def test_clone_list_subclass_slots(session):
    src = SlotList([1])
    src.tag = ["t"]
    clone = clone_sequence(session, src)
    assert clone == [1]
    assert clone.tag == ["t"]
    assert clone.tag is not src.tag


def test_clone_deque_subclass_keeps_maxlen(session):
    class Window(deque):
        def __init__(self, size):
            super().__init__(maxlen=size)

    src = Window(2)
    src.extend([1, 2])
    clone = clone_sequence(session, src)
    assert type(clone) is Window
    assert clone == src
    assert clone.maxlen == 2


# -----------------------------------------------------------------------------
# ARRAY
# -----------------------------------------------------------------------------


def test_clone_tuple(session):
    src = (1, [2], "x")
    clone = clone_array(session, src)
    assert clone == src
    assert clone[1] is not src[1]


def test_clone_namedtuple(session):
    src = Coord([1], 2)
    clone = clone_array(session, src)
    assert type(clone) is Coord
    assert clone == src
    assert clone.x is not src.x


def test_clone_frozenset(session):
    src = frozenset({1, 2, (3, 4)})
    clone = clone_array(session, src)
    assert type(clone) is frozenset
    assert clone == src


def test_clone_array_has_no_identity(session):
    src = ([1],)
    first = clone_array(session, src)
    second = clone_array(session, src)
    assert first is not second
    # The list inside is reference-typed and still aliases
    assert first[0] is second[0]


def test_clone_tuple_subclass_with_custom_new(session):
    src = Span([1], 2)
    clone = clone_array(session, src)
    assert type(clone) is Span
    assert clone == src
    assert clone[0] is not src[0]


def test_clone_frozenset_subclass_fields(session):
    src = TagFrozenSet({1, 2})
    src.tag = ["t"]
    clone = clone_array(session, src)
    assert type(clone) is TagFrozenSet
    assert clone == src
    assert clone.tag == ["t"]
    assert clone.tag is not src.tag


def test_clone_tuple_cycle_rebuilds_root(session):
    holder = []
    src = (holder,)
    holder.append(src)
    clone = clone_array(session, src)
    assert clone[0] is not holder
    assert clone[0][0] is not clone
    assert clone[0][0][0] is clone[0]


# -----------------------------------------------------------------------------
# MAPPING
# -----------------------------------------------------------------------------


def test_clone_dict(session):
    src = {"a": [1], "b": {"c": 2}}
    clone = clone_mapping(session, src)
    assert clone == src
    assert clone["a"] is not src["a"]
    assert clone["b"] is not src["b"]


def test_clone_dict_self_reference(session):
    src = {}
    src["self"] = src
    clone = clone_mapping(session, src)
    assert clone["self"] is clone


@pytest.mark.parametrize("src", [OrderedDict(b=1, a=2), Counter("hello"), TaggedDict(a=[1])])
def test_clone_dict_subclasses(session, src):
    clone = clone_mapping(session, src)
    assert type(clone) is type(src)
    assert clone == src


def test_clone_defaultdict_shares_factory(session):
    src = defaultdict(list, {"a": [1]})
    clone = clone_mapping(session, src)
    assert clone.default_factory is list
    assert clone["a"] == [1]
    clone["missing"].append(1)
    assert "missing" not in src


def test_clone_dict_subclass_fields_set_before_items(session):
    src = LoggedDict(a=1)
    clone = clone_mapping(session, src)
    assert type(clone) is LoggedDict
    assert clone == {"a": 1}
    assert clone.log == ["a"]
    assert src.log == []


def test_clone_dict_subclass_attributes(session):
    src = TaggedDict(a=1)
    src.tag = ["t"]
    clone = clone_mapping(session, src)
    assert clone.tag == ["t"]
    assert clone.tag is not src.tag


# -----------------------------------------------------------------------------
# SET
# -----------------------------------------------------------------------------


def test_clone_set(session):
    src = {1, "a", (2, 3)}
    clone = clone_set(session, src)
    assert clone == src
    clone.add(4)
    assert 4 not in src


def test_clone_set_subclass_attributes(session):
    src = TagSet({1})
    src.tag = ["t"]
    clone = clone_set(session, src)
    assert type(clone) is TagSet
    assert clone == {1}
    assert clone.tag == ["t"]
    assert clone.tag is not src.tag


# -----------------------------------------------------------------------------
# RECORD
# -----------------------------------------------------------------------------


def test_clone_dataclass(session):
    src = Node("root", meta={"k": [1]})
    clone = clone_record(session, src)
    assert type(clone) is Node
    assert clone.name == "root"
    assert clone.meta == {"k": [1]}
    assert clone.meta is not src.meta


def test_clone_record_back_reference(session, tree):
    clone = clone_record(session, tree)
    assert clone.children[0].parent is clone
    assert clone.children[0].children[0].parent is clone.children[0]


def test_clone_frozen_dataclass(session):
    src = FrozenPoint(1, 2)
    clone = clone_record(session, src)
    assert clone == src
    assert clone is not src


def test_clone_slotted_record(session):
    src = Slotted([1], None, "hidden")
    clone = clone_record(session, src)
    assert clone.left == [1]
    assert clone.left is not src.left
    assert clone.right is None
    assert clone.secret == "hidden"


def test_clone_record_leaves_unwritable_fields_at_zero(session):
    src = Cached("k", cache={"x": 1}, hits=7)
    clone = clone_record(session, src)
    assert clone.key == "k"
    assert clone.cache == {}
    assert clone.hits == 0
    assert src.cache == {"x": 1}


def test_clone_record_clone_exclude(session):
    handle = object()
    src = Plain(data=[1], handle=handle)
    clone = clone_record(session, src)
    assert clone.data == [1]
    assert clone.handle is None


def test_clone_record_skips_init(session):
    class Counted:
        created = 0

        def __init__(self):
            Counted.created += 1
            self.value = 1

    src = Counted()
    clone = clone_record(session, src)
    assert Counted.created == 1
    assert clone.value == 1


def test_clone_str_subclass_with_fields(session):
    src = Label("k")
    src.meta = []
    clone = clone_record(session, src)
    assert type(clone) is Label
    assert clone == "k"
    clone.meta.append(1)
    assert src.meta == []


def test_clone_float_subclass_with_slots(session):
    src = Measured(1.5)
    src.unit = ["kg"]
    clone = clone_record(session, src)
    assert type(clone) is Measured
    assert clone == 1.5
    assert clone.unit == ["kg"]
    assert clone.unit is not src.unit


def test_clone_exception_keeps_args(session):
    payload = [1]
    src = ValueError("boom", payload)
    clone = clone_record(session, src)
    assert type(clone) is ValueError
    assert clone.args == ("boom", [1])
    assert clone.args[1] is not payload


def test_clone_os_error_keeps_errno(session):
    src = OSError(2, "missing")
    clone = clone_record(session, src)
    assert clone.errno == 2
    assert clone.strerror == "missing"


def test_clone_exception_with_custom_init(session):
    src = LookupFailed(["k"])
    clone = clone_record(session, src)
    assert clone.args == src.args
    assert clone.key == ["k"]
    assert clone.key is not src.key


def test_clone_exception_cause(session):
    src = RuntimeError("outer")
    src.__cause__ = ValueError("inner")
    clone = clone_record(session, src)
    assert type(clone.__cause__) is ValueError
    assert clone.__cause__ is not src.__cause__
    assert clone.__cause__.args == ("inner",)
    assert clone.__suppress_context__


# -----------------------------------------------------------------------------
# VARIANT
# -----------------------------------------------------------------------------


def test_clone_variant_rewraps(session):
    src = Figure([1, 2])
    clone = clone_variant(session, src)
    assert type(clone) is Figure
    assert clone == src
    assert clone.value is not src.value


def test_clone_empty_variant_is_absent(session):
    assert clone_variant(session, Figure()) is None


def test_clone_variant_of_record(session):
    src = Figure(Point(1, 2))
    clone = clone_variant(session, src)
    assert clone.value == Point(1, 2)
    assert clone.value is not src.value


# -----------------------------------------------------------------------------
# REJECT
# -----------------------------------------------------------------------------


def test_reject_callable(session):
    with pytest.raises(UnclonableKindError) as exc_info:
        reject(session, len)
    assert exc_info.value.kind == "callable"
    assert exc_info.value.type_name == "builtins.builtin_function_or_method"
