"""Tests for writing fields and changing the prototype set."""

import copy
import logging
import pickle

import pytest
import objtalk
import objtest


def test_write_goes_to_own_fields(obj, p1):
    """Test assignment never writes into a prototype."""
    obj.add_prototype(p1)
    obj.a = "own"
    obj["extra"] = 5

    assert p1 == {"a": 1, "b": 2}
    assert vars(obj) == {"a": "own", "extra": 5}


def test_write_does_not_touch_composite_prototype(obj):
    """Test shadowing a composite prototype leaves it unchanged."""
    base = objtalk.new_object({"k": "base"})
    obj.add_prototype(base)
    obj.k = "child"

    assert base.k == "base"
    assert obj.k == "child"


def test_add_is_idempotent(obj, p1):
    """Test adding the same prototype twice keeps one membership."""
    obj.add_prototype(p1)
    obj.add_prototype(p1)

    assert len(obj.prototypes) == 1


def test_remove_unknown_is_noop(obj, p1, p2):
    """Test removing a non-member leaves the set alone."""
    obj.add_prototype(p1)
    obj.remove_prototype(p2)
    obj.remove_prototype({"a": 1, "b": 2})

    assert obj.prototypes == [p1]


def test_replace_from_list(obj, p1, p2):
    """Test assigning a list replaces the set and keeps its order."""
    obj.add_prototype({"b": "old"})
    obj.prototypes = [p1, p2]

    assert obj.prototypes == [p2, p1]
    assert list(obj.prototypes) == [p1, p2]
    assert obj.b == 2


def test_replace_deduplicates(obj, p1, p2):
    """Test duplicates in an assigned sequence are dropped."""
    obj.prototypes = [p1, p2, p1]

    members = list(obj.prototypes)
    assert len(members) == 2
    assert members[0] is p1
    assert members[1] is p2


def test_replace_from_tuple_and_item(obj, p1, p2):
    """Test tuples and item syntax also replace the set."""
    obj.prototypes = (p2,)
    assert obj.b == 20

    obj["prototypes"] = [p1]
    assert obj.b == 2
    assert obj.prototypes == [p1]


def test_replace_from_set(obj):
    """Test assigning a set of hashable prototypes."""
    obj.prototypes = {objtest.Point}
    obj.x, obj.y = 1, 1

    assert obj.total() == 2


def test_replace_adopts_prototype_set(obj, p1):
    """Test an assigned PrototypeSet is used as-is, not copied."""
    protos = objtalk.PrototypeSet([p1])
    obj.prototypes = protos

    assert obj.prototypes is protos
    protos.discard(p1)
    assert obj.a is None


def test_replace_to_empty(obj, p1):
    """Test assigning an empty list clears the set."""
    obj.add_prototype(p1)
    obj.prototypes = []

    assert len(obj.prototypes) == 0
    assert obj.a is None


@pytest.mark.parametrize("value", [42, "p1", b"p1", None, {"a": 1}, 3.5])
def test_invalid_assignment_rejected(obj, p1, value):
    """Test non-collections are rejected and the set is kept."""
    obj.add_prototype(p1)
    before = obj.prototypes

    with pytest.raises(objtalk.InvalidPrototypeAssignment) as info:
        obj.prototypes = value

    assert info.value.value is value
    assert obj.prototypes is before
    assert obj.prototypes == [p1]


def test_invalid_assignment_is_type_error(obj):
    """Test the assignment error can be caught as a TypeError."""
    with pytest.raises(TypeError, match="prototypes must be a set or a sequence, not int"):
        obj.prototypes = 42


def test_accessors_are_read_only(obj):
    """Test the accessor names cannot be overwritten."""
    with pytest.raises(AttributeError):
        obj.add_prototype = "nope"
    with pytest.raises(AttributeError):
        obj["remove_prototype"] = "nope"

    assert "add_prototype" not in vars(obj)
    assert callable(obj.add_prototype)


def test_set_field_function(obj, p1):
    """Test the policy function matches attribute assignment."""
    objtalk.set_field(obj, "own", 1)
    objtalk.set_field(obj, "prototypes", [p1])

    assert obj.own == 1
    assert obj.a == 1


def test_mutations_are_logged(obj, p1, caplog):
    """Test prototype set changes emit debug records."""
    caplog.set_level(logging.DEBUG, logger="objtalk")

    obj.add_prototype(p1)
    obj.add_prototype(p1)
    obj.remove_prototype(p1)
    obj.remove_prototype(p1)
    obj.prototypes = [p1]

    messages = [r.getMessage() for r in caplog.records if r.name == "objtalk._policy"]
    assert len(messages) == 3
    assert messages[0].startswith("Added prototype <dict at 0x")
    assert messages[1].startswith("Removed prototype <dict at 0x")
    assert messages[2] == "Replaced prototypes: now 1 prototype(s)"


def test_reads_are_not_logged(obj, p1, caplog):
    """Test lookups do not produce log records."""
    obj.add_prototype(p1)
    caplog.set_level(logging.DEBUG, logger="objtalk")

    obj.a
    obj.missing

    assert not [r for r in caplog.records if r.name.startswith("objtalk")]


def test_internal_slot_name_rejected(obj, p1):
    """Test the slot holding the prototype set cannot be written as a field."""
    obj.add_prototype(p1)

    with pytest.raises(AttributeError):
        obj._protoset = 5
    with pytest.raises(AttributeError):
        obj["_protoset"] = 5

    assert "_protoset" not in vars(obj)
    assert obj.prototypes == [p1]


def test_copy_keeps_fields_and_prototypes(obj, p1, p2):
    """Test a shallow copy resolves like the original with its own set."""
    obj.add_prototype(p1)
    obj.own = "mine"

    dup = copy.copy(obj)

    assert dup.a == 1
    assert dup.own == "mine"
    assert dup.prototypes == obj.prototypes
    assert dup.prototypes is not obj.prototypes
    assert list(dup.prototypes)[0] is p1

    dup.add_prototype(p2)
    dup.own = "copy"
    assert len(obj.prototypes) == 1
    assert obj.own == "mine"


def test_deepcopy_copies_prototypes(obj, p1):
    """Test a deep copy gets copies of its prototypes."""
    obj.add_prototype(p1)
    dup = copy.deepcopy(obj)

    assert dup.a == 1
    assert list(dup.prototypes)[0] is not p1
    p1["a"] = 100
    assert dup.a == 1


def test_pickle_keeps_fields_and_prototypes(obj, p1):
    """Test a pickled composite loads with its fields and prototypes."""
    obj.add_prototype(p1)
    obj.own = "mine"

    loaded = pickle.loads(pickle.dumps(obj))

    assert loaded.own == "mine"
    assert loaded.a == 1
    assert loaded.b == 2
    assert len(loaded.prototypes) == 1
