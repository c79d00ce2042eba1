import pytest
import objtalk
import objtest


@pytest.fixture
def obj():
    """Fresh composite with no fields or prototypes."""
    return objtalk.new_object()


@pytest.fixture
def p1():
    """Leaf record with fields a and b."""
    return {"a": 1, "b": 2}


@pytest.fixture
def p2():
    """Leaf record with fields b and c, overlapping p1 on b."""
    return {"b": 20, "c": 30}


@pytest.fixture
def point():
    return objtest.Point(3, 4)
