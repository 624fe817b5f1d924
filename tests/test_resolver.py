import pytest
from hypothesis import given, strategies as st

from plang.analysis.resolver import Resolver, resolve_program
from plang.reader import ast
from plang.reader.parser import parse
from plang.types import errors


def _walk(node):
    """Yield every AST node below and including `node`."""
    yield node
    for value in vars(node).values():
        children = value if isinstance(value, list) else [value]
        for child in children:
            if isinstance(child, ast.Node):
                yield from _walk(child)


def _nodes(statements, kind):
    return [n for s in statements for n in _walk(s) if isinstance(n, kind)]


def _distances_by_name(source):
    statements = parse(source)
    table = resolve_program(statements)
    return [
        (n.name.lexeme, table.get(n.id))
        for n in _nodes(statements, (ast.Variable, ast.Assign))
    ]


def test_globals_are_not_recorded():
    assert _distances_by_name("var a = 1; print a; a = 2;") == [("a", None), ("a", None)]


def test_block_locals_get_distances():
    assert _distances_by_name("{ var a = 1; { print a; a = 2; } print a; }") == [
        ("a", 1),
        ("a", 1),
        ("a", 0),
    ]


def test_shadowing_resolves_to_nearest():
    assert _distances_by_name("{ var a = 1; { var a = 2; print a; } print a; }") == [
        ("a", 0),
        ("a", 0),
    ]


def test_function_body_shares_parameter_scope():
    source = "fun make() { var n = 0; fun inc() { n = n + 1; return n; } return inc; }"
    assert _distances_by_name(source) == [("n", 1), ("n", 1), ("n", 1), ("inc", 0)]


def test_this_and_super_distances():
    statements = parse(
        "class A { m() {} } class B : A { m() { fun f() { return super.m; } return this; } }"
    )
    table = resolve_program(statements)
    (sup,) = _nodes(statements, ast.Super)
    (this,) = _nodes(statements, ast.This)
    # super -> this -> method params -> f params
    assert table[sup.id] == 3
    assert table[this.id] == 1


def test_local_class_declaration_is_recorded():
    statements = parse("{ class A {} }")
    table = resolve_program(statements)
    (klass,) = _nodes(statements, ast.Class)
    assert table[klass.id] == 0


def test_top_level_class_is_global():
    statements = parse("class A {}")
    assert resolve_program(statements) == {}


@pytest.mark.parametrize(
    "source,error,message",
    [
        ("{ var a = 1; var a = 2; }", errors.PlangDuplicateDeclaration,
         "[line 1] Already a variable named 'a' in this scope."),
        ("fun f(a, a) {}", errors.PlangDuplicateDeclaration,
         "[line 1] Already a variable named 'a' in this scope."),
        ("{ var x = x; }", errors.PlangSelfReferenceInInitializer,
         "[line 1] Can't read local variable 'x' in its own initializer."),
        ("return 1;", errors.PlangReturnOutsideFunction,
         "[line 1] Can't return from top-level code."),
        ("print this;", errors.PlangThisOutsideMethod,
         "[line 1] Can't use 'this' outside of a class method."),
        ("fun f() { return this; }", errors.PlangThisOutsideMethod,
         "[line 1] Can't use 'this' outside of a class method."),
        ("print super.m;", errors.PlangSuperOutsideMethod,
         "[line 1] Can't use 'super' outside of a class method."),
        ("class A { m() { return super.m(); } }", errors.PlangInvalidSuperUsage,
         "[line 1] Can't use 'super' in a class with no superclass."),
        ("class A : A {}", errors.PlangSelfInheritingClass,
         "[line 1] Class 'A' can't inherit from itself."),
    ],
)
def test_scope_rule_violations(source, error, message):
    with pytest.raises(error) as exc:
        resolve_program(parse(source))
    assert str(exc.value) == message
    assert isinstance(exc.value, errors.PlangResolveError)


def test_global_self_reference_resolves():
    assert resolve_program(parse("var x = x;")) == {}


def test_global_redeclaration_is_allowed():
    resolve_program(parse("var a = 1; var a = 2;"))


def test_this_in_closure_inside_method_is_allowed():
    resolve_program(parse("class A { m() { fun f() { return this; } return f; } }"))


def test_return_inside_method_and_anonymous_function():
    resolve_program(parse("class A { m() { return 1; } } var f = fun () { return 2; };"))


def test_resolver_state_is_restored_after_class():
    resolver = Resolver()
    resolver.resolve_program(parse("class A : B { m() { return this; } }"))
    assert resolver.scopes == []
    with pytest.raises(errors.PlangThisOutsideMethod):
        resolver.resolve_program(parse("print this;"))


# -----------------------------------------------------
# Distance stability
# -----------------------------------------------------

names = st.sampled_from(["a", "b", "c"])
leaf = st.one_of(
    names.map(lambda n: f"var {n} = 1;"),
    names.map(lambda n: f"print {n};"),
    names.map(lambda n: f"{n} = 2;"),
)
statement = st.recursive(
    leaf,
    lambda children: st.one_of(
        st.lists(children, max_size=3).map(lambda xs: "{ " + " ".join(xs) + " }"),
        st.lists(children, max_size=3).map(lambda xs: "fun f(a) { " + " ".join(xs) + " }"),
    ),
    max_leaves=12,
)
programs = st.lists(statement, max_size=5).map(" ".join)


def _resolve_or_error(statements):
    try:
        return resolve_program(statements)
    except errors.PlangResolveError as e:
        return type(e), str(e)


@given(programs)
def test_resolving_twice_gives_identical_tables(source):
    statements = parse(source)
    assert _resolve_or_error(statements) == _resolve_or_error(statements)


@given(programs)
def test_distances_are_keyed_by_program_nodes(source):
    statements = parse(source)
    table = _resolve_or_error(statements)
    if isinstance(table, dict):
        assert all(d >= 0 for d in table.values())
        assert set(table) <= {n.id for s in statements for n in _walk(s)}
