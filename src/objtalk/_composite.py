"""Composite object type"""

__all__ = ["Composite"]

import reprlib

import objtalk


class Composite:
    """An object composed from its own fields and an ordered set of prototypes.

    Attribute and item access both go through the resolution policy, so
    `obj.name` and `obj["name"]` are interchangeable. Names nothing defines
    read as None instead of raising. Protocol names like `__len__` are
    left to Python and raise AttributeError when missing.

    Own fields are stored in the instance `__dict__`. The prototype set
    is kept in a slot outside of it, so it never shows up as a field.

    Use `objtalk.new_object` to create these; the constructor takes no
    template.

    Attributes:
        prototypes: (PrototypeSet) Live set of delegates, assignable from
            any set or sequence
    """

    __slots__ = ("_protoset", "__dict__", "__weakref__")

    def __init__(self):
        object.__setattr__(self, "_protoset", objtalk.PrototypeSet())

    @property
    def prototypes(self):
        return self._protoset

    def add_prototype(self, candidate):
        """Append a delegate, consulted after existing ones. Repeats are ignored."""
        objtalk.add_prototype(self, candidate)

    def remove_prototype(self, candidate):
        """Remove a delegate. Unknown candidates are ignored."""
        objtalk.remove_prototype(self, candidate)

    def __getattr__(self, name):
        # Only reached when normal lookup fails, so own fields never get here
        if name == "_protoset" or objtalk.is_dunder(name):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'")
        return objtalk.get_field(self, name)

    def __setattr__(self, name, value):
        objtalk.set_field(self, name, value)

    def __setstate__(self, state):
        # Used by copy and pickle; state is (fields, slots) from object.__getstate__
        fields, slots = state if isinstance(state, tuple) else (state, None)
        protoset = (slots or {}).get("_protoset", ())
        object.__setattr__(self, "_protoset", objtalk.PrototypeSet(protoset))
        vars(self).update(fields or {})

    def __getitem__(self, name):
        if not isinstance(name, str):
            raise TypeError(f"field name must be str, not {type(name).__name__}")
        return objtalk.get_field(self, name)

    def __setitem__(self, name, value):
        if not isinstance(name, str):
            raise TypeError(f"field name must be str, not {type(name).__name__}")
        objtalk.set_field(self, name, value)

    def __iter__(self):
        return iter(objtalk.keys_of(self))

    def __dir__(self):
        names = objtalk.keys_of(self)
        names.update(vars(self))
        names.update(objtalk.ACCESSORS)
        return sorted(names)

    @reprlib.recursive_repr()
    def __repr__(self):
        return f"Composite({vars(self)!r}, prototypes={len(self._protoset)})"
