"""Factory for composite objects"""

__all__ = ["new_object"]

import collections.abc
import inspect
import types

import objtalk


# Exact types whose instances are plain records; subclasses still register
_plain_types = (dict, types.SimpleNamespace)

# Seeds of these types have no fields to copy
_scalar_types = (str, bytes, bytearray, int, float, complex)


def new_object(seed=None):
    """Create a composite object, optionally seeded from a template.

    The seed's own fields are shallow copied into the new object. Mapping
    seeds contribute their string keys, other objects their instance
    attributes and assigned slots. Reserved names and protocol names are
    not copied. Later changes to the seed do not show up in the object,
    and the other way around.

    When the seed is an instance of a custom class, including subclasses
    of dict and other mappings, that class becomes the first prototype of
    the new object. Methods and properties of the class then work on the
    composite, with the composite passed as `self`. Methods implemented in
    C only bind to real instances and read as None.

    Seeds that are not templates (None, scalars, strings, collections,
    functions, classes, modules) give an empty object.

    Args:
        seed: (object | None) Optional template
    Returns:
        (Composite) New object with the seed's fields
    """
    obj = objtalk.Composite()
    if not _is_template(seed):
        return obj

    fields = vars(obj)
    for name, value in _own_fields(seed):
        if name in objtalk.RESERVED or objtalk.is_dunder(name):
            continue
        fields[name] = value

    if type(seed) not in _plain_types and not objtalk.is_composite(seed):
        obj.add_prototype(type(seed))
    return obj


def _is_template(seed):
    if seed is None or isinstance(seed, _scalar_types):
        return False
    if isinstance(seed, collections.abc.Mapping):
        return True
    if isinstance(seed, (collections.abc.Sequence, collections.abc.Set)):
        return False
    if inspect.isroutine(seed) or inspect.isclass(seed) or inspect.ismodule(seed):
        return False
    return True


def _own_fields(seed):
    """List (name, value) pairs a seed defines directly."""
    if isinstance(seed, collections.abc.Mapping):
        return [(k, v) for k, v in seed.items() if isinstance(k, str)]
    if objtalk.is_composite(seed):
        return list(vars(seed).items())

    fields = dict(getattr(seed, "__dict__", {}))
    for klass in type(seed).__mro__:
        for name in _slot_names(klass):
            if name in fields:
                continue
            try:
                fields[name] = getattr(seed, name)
            except AttributeError:
                pass  # unassigned slot
    return list(fields.items())


def _slot_names(klass):
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for name in slots:
        if name in ("__dict__", "__weakref__"):
            continue
        if name.startswith("__") and not name.endswith("__"):
            name = f"_{klass.__name__.lstrip('_')}{name}"
        yield name
