"""Error classes"""

__all__ = ["InvalidPrototypeAssignment"]


class InvalidPrototypeAssignment(TypeError):
    """Assignment to `prototypes` with a value that is not a collection.

    Only sets and sequences (other than strings and bytes) can be turned
    into a prototype set. The object's existing prototypes are left as
    they were.

    Args:
        value: The rejected value

    Attributes:
        value: The rejected value
    """

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"prototypes must be a set or a sequence, not {type(value).__name__}")
