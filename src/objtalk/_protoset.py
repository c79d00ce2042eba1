"""Ordered identity set holding an object's prototypes"""

__all__ = ["PrototypeSet"]

import collections.abc


_missing = object()


class PrototypeSet:
    """Ordered collection of prototype references.

    Membership is decided by identity, never by equality, so two distinct
    dicts with identical contents are separate members. Iteration follows
    insertion order, which is the order prototypes are consulted when
    resolving a name.

    The set keeps a strong reference to each member. This keeps the
    identity keys valid for as long as the member is listed.

    Args:
        items: (Iterable) Initial members, duplicates are dropped

    """

    __slots__ = ("_members",)
    __hash__ = None

    def __init__(self, items=()):
        self._members = {}
        for item in items:
            self.add(item)

    def add(self, item):
        """Append item unless it is already a member.

        Returns:
            (bool) True if the item was inserted
        """
        key = id(item)
        if key in self._members:
            return False
        self._members[key] = item
        return True

    def discard(self, item):
        """Remove item if it is a member.

        Returns:
            (bool) True if the item was removed
        """
        return self._members.pop(id(item), _missing) is not _missing

    def __contains__(self, item):
        return id(item) in self._members

    def __iter__(self):
        return iter(list(self._members.values()))

    def __len__(self):
        return len(self._members)

    def __bool__(self):
        return bool(self._members)

    def __eq__(self, other):
        if not isinstance(other, (PrototypeSet, collections.abc.Set, list, tuple)):
            return NotImplemented
        members = list(other)
        if len(members) != len(self._members):
            return False
        return {id(m) for m in members} == self._members.keys()

    def __reduce__(self):
        # Identity keys are rebuilt for whatever members the copy ends up with
        return (PrototypeSet, (list(self._members.values()),))

    def __repr__(self):
        inner = ", ".join(describe_member(m) for m in self._members.values())
        return f"PrototypeSet([{inner}])"


def describe_member(item):
    """Short label for a member, avoiding recursion into composites."""
    if isinstance(item, type):
        return f"<class {item.__qualname__}>"
    return f"<{type(item).__name__} at {id(item):#x}>"
