"""
Objtalk: multi-parent prototype composition for Python objects

An object created with `new_object` delegates to an ordered set of
prototypes instead of a single class chain. Reads check the object's own
fields first, then each prototype in the order it was added. Prototypes
can be other composite objects, dicts, classes, or any Python object.
"""

__version__ = "0.1.0"


from ._error import *
from ._protoset import *
from ._policy import *
from ._composite import *
from ._factory import *
