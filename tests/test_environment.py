import pytest

from plang.types.environment import Environment
from plang.types.errors import PlangError, PlangInternalError, PlangUndefinedVariable
from plang.types.nil import Nil


@pytest.fixture
def chain():
    root = Environment()
    root.define("x", 1.0)
    middle = root.enclose()
    middle.define("y", 2.0)
    inner = middle.enclose()
    inner.define("x", 3.0)
    return root, middle, inner


def test_define_and_get_at(chain):
    root, middle, inner = chain
    assert inner.get_at("x", 0) == 3.0
    assert inner.get_at("y", 1) == 2.0
    assert inner.get_at("x", 2) == 1.0


def test_get_at_does_not_search_other_frames(chain):
    _, _, inner = chain
    with pytest.raises(PlangUndefinedVariable):
        inner.get_at("y", 0)


def test_assign_at_updates_only_that_frame(chain):
    root, _, inner = chain
    inner.assign_at("x", 10.0, 2)
    assert root.vars["x"] == 10.0
    assert inner.vars["x"] == 3.0


def test_assign_at_requires_existing_binding(chain):
    _, _, inner = chain
    with pytest.raises(PlangUndefinedVariable):
        inner.assign_at("z", 1.0, 1)


def test_define_replaces_binding_in_same_frame():
    env = Environment()
    env.define("a", 1.0)
    env.define("a", Nil)
    assert env.get_at("a", 0) is Nil


def test_globals_go_straight_to_root(chain):
    root, _, inner = chain
    assert inner.root() is root
    assert inner.get_global("x") == 1.0
    inner.assign_global("x", 5.0)
    assert root.vars["x"] == 5.0


def test_undefined_global_carries_line(chain):
    _, _, inner = chain
    with pytest.raises(PlangUndefinedVariable) as exc:
        inner.get_global("missing", 7)
    assert str(exc.value) == "[line 7] Undefined variable 'missing'."
    with pytest.raises(PlangUndefinedVariable):
        inner.assign_global("missing", 1.0)


def test_walking_past_the_root_is_internal_error(chain):
    _, _, inner = chain
    with pytest.raises(PlangInternalError) as exc:
        inner.get_at("x", 3)
    assert not isinstance(exc.value, PlangError)


def test_depth_and_repr(chain):
    root, middle, inner = chain
    assert root.depth() == 0
    assert inner.depth() == 2
    assert str(middle) == "{y: 2.0} -> ..."
    assert repr(inner) == "<Environment chain: {x: 3.0} -> {y: 2.0} -> {x: 1.0}>"


def test_closure_frames_are_shared_not_copied():
    outer = Environment()
    outer.define("n", 0.0)
    a = outer.enclose()
    b = outer.enclose()
    a.assign_at("n", 1.0, 1)
    assert b.get_at("n", 1) == 1.0
