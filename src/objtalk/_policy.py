"""Resolution and interception policy for composite objects.

Every attribute and item operation on a `Composite` ends up in one of the
functions here. They are plain functions of the target object and hold no
state of their own; everything they consult lives on the object.

Resolution order for a read:
    1. The accessor names `add_prototype` and `remove_prototype`
    2. The reserved `prototypes` name, which is the live prototype set
    3. The object's own fields
    4. Each prototype in insertion order, first match wins
    5. None

A prototype is either another composite, which is searched the same way
(own fields, then its own prototypes), or a leaf. Leaves are mappings
(string keys are fields), classes (attributes along the MRO, bound to the
object doing the read), or any other object (ordinary getattr).

A prototype that holds None for a name defines it: the search stops there
and the read gives None, even if a later prototype has a real value.
Presence decides a match, not the value, unlike a lookup that passes
over absent values.

Example:
    >>> base = objtalk.new_object({"greeting": "hello"})
    >>> obj = objtalk.new_object()
    >>> obj.add_prototype(base)
    >>> obj.greeting
    'hello'
    >>> obj.greeting = "hi"
    >>> obj.greeting, base.greeting
    ('hi', 'hello')
"""

__all__ = [
    "PROTOTYPES",
    "ACCESSORS",
    "RESERVED",
    "get_field",
    "set_field",
    "keys_of",
    "add_prototype",
    "remove_prototype",
    "is_composite",
    "is_dunder",
]

import collections.abc
import logging
import types

import objtalk


logger = logging.getLogger(__name__)

PROTOTYPES = "prototypes"
ACCESSORS = ("add_prototype", "remove_prototype")
RESERVED = frozenset((PROTOTYPES,) + ACCESSORS)

_missing = object()

# Slots and C-level fields and methods only bind to real instances of
# their class, never to a composite wrapping that class.
_instance_descriptors = (
    types.MemberDescriptorType,
    types.GetSetDescriptorType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
)

# Slot holding the prototype set on every composite
_SLOT = "_protoset"


def is_composite(value):
    """True if value is a composite object."""
    return isinstance(value, objtalk.Composite)


def is_dunder(name):
    """True for Python protocol names like `__init__`."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def get_field(obj, name):
    """Resolve a name on a composite object.

    Args:
        obj: (Composite) Object being read
        name: (str) Field name
    Returns:
        (object) Resolved value, or None when nothing defines the name
    """
    if name in ACCESSORS:
        return getattr(obj, name)
    if name in (PROTOTYPES, _SLOT):
        return obj._protoset

    fields = vars(obj)
    if name in fields:
        return fields[name]
    if is_dunder(name):
        return None

    value = _search(obj, name, obj, {id(obj)})
    return None if value is _missing else value


def set_field(obj, name, value):
    """Write a name on a composite object.

    Writing `prototypes` replaces the prototype set. Anything else becomes
    an own field of the object, shadowing what prototypes supply. Nothing
    is ever written into a prototype.

    Args:
        obj: (Composite) Object being written
        name: (str) Field name
        value: (object) New value
    Raises:
        InvalidPrototypeAssignment: `prototypes` given a non-collection
        AttributeError: Assignment to an accessor or the internal slot name
    """
    if name == PROTOTYPES:
        protoset = _as_protoset(value)
        object.__setattr__(obj, "_protoset", protoset)
        logger.debug(f"Replaced prototypes: now {len(protoset)} prototype(s)")
    elif name in ACCESSORS:
        raise AttributeError(f"'{name}' is a read-only accessor")
    elif name == _SLOT:
        raise AttributeError(f"'{name}' is internal, assign 'prototypes' instead")
    else:
        vars(obj)[name] = value


def keys_of(obj):
    """Names reachable through the prototype graph of a composite.

    Each prototype contributes the names found along its chain: a
    composite gives its own fields plus everything reachable from its own
    prototypes, a mapping gives its string keys, and classes and instances
    give their attribute names up to but not including `object`. The
    reserved `prototypes` name is always present.

    The object's own fields are not part of the result, only the names of
    what it delegates to.

    Args:
        obj: (Composite) Object to enumerate
    Returns:
        (set[str]) Field names
    """
    names = set()
    _collect(obj, names, {id(obj)})
    names.add(PROTOTYPES)
    return names


def add_prototype(obj, candidate):
    """Append candidate to the prototype set unless already present.

    Newly added prototypes are consulted after the existing ones.
    """
    protoset = obj._protoset
    if protoset.add(candidate):
        logger.debug(
            f"Added prototype {objtalk._protoset.describe_member(candidate)}: "
            f"now {len(protoset)} prototype(s)")


def remove_prototype(obj, candidate):
    """Remove candidate from the prototype set, if it is a member."""
    protoset = obj._protoset
    if protoset.discard(candidate):
        logger.debug(
            f"Removed prototype {objtalk._protoset.describe_member(candidate)}: "
            f"now {len(protoset)} prototype(s)")


def _as_protoset(value):
    """Coerce an assigned value into a PrototypeSet."""
    if isinstance(value, objtalk.PrototypeSet):
        return value
    if isinstance(value, (str, bytes, bytearray)):
        raise objtalk.InvalidPrototypeAssignment(value)
    if isinstance(value, (collections.abc.Set, collections.abc.Sequence)):
        return objtalk.PrototypeSet(value)
    raise objtalk.InvalidPrototypeAssignment(value)


def _search(obj, name, receiver, seen):
    """First value any prototype of obj supplies for name."""
    for proto in obj._protoset:
        value = _lookup(proto, name, receiver, seen)
        if value is not _missing:
            return value
    return _missing


def _lookup(source, name, receiver, seen):
    """Value a single prototype supplies for name, or _missing."""
    if is_composite(source):
        # A composite seen earlier in this lookup had nothing to give
        if id(source) in seen:
            return _missing
        seen.add(id(source))
        fields = vars(source)
        if name in fields:
            return fields[name]
        return _search(source, name, receiver, seen)

    if isinstance(source, collections.abc.Mapping):
        if name in source:
            return source[name]
        return _missing

    if isinstance(source, type):
        for klass in source.__mro__:
            if klass is object:
                break
            attrs = vars(klass)
            if name not in attrs:
                continue
            attr = attrs[name]
            if isinstance(attr, _instance_descriptors):
                return _missing
            bind = getattr(type(attr), "__get__", None)
            if bind is not None:
                return bind(attr, receiver, source)
            return attr
        return _missing

    return getattr(source, name, _missing)


def _collect(obj, names, seen):
    for proto in obj._protoset:
        if is_composite(proto):
            if id(proto) in seen:
                continue
            seen.add(id(proto))
            names.update(_public(vars(proto)))
            _collect(proto, names, seen)
        elif isinstance(proto, collections.abc.Mapping):
            names.update(_public(proto))
        elif isinstance(proto, type):
            # Only names a read through the class can actually resolve
            for klass in proto.__mro__[:-1]:
                attrs = vars(klass)
                names.update(k for k in _public(attrs)
                             if not isinstance(attrs[k], _instance_descriptors))
        else:
            names.update(_public(getattr(proto, "__dict__", ())))
            for klass in type(proto).__mro__[:-1]:
                names.update(_public(vars(klass)))


def _public(keys):
    return (k for k in keys if isinstance(k, str) and not is_dunder(k))
