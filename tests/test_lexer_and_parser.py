import pytest

from plang.debug_utils.ast_printer import pformat
from plang.reader import ast
from plang.reader.lexer import lex, scan
from plang.reader.parser import MAX_ARGUMENTS, Parser, parse
from plang.reader.token import TokenType as T
from plang.types.errors import PlangParseError, PlangSyntaxError


def _types(source):
    return [t.type for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("var x = 1.5;", [T.VAR, T.IDENTIFIER, T.EQUAL, T.NUMBER, T.SEMICOLON, T.EOF]),
        ("a != b == c", [T.IDENTIFIER, T.BANG_EQUAL, T.IDENTIFIER, T.EQUAL_EQUAL, T.IDENTIFIER, T.EOF]),
        ("<= >= < > !", [T.LESS_EQUAL, T.GREATER_EQUAL, T.LESS, T.GREATER, T.BANG, T.EOF]),
        ("class B : A {}", [T.CLASS, T.IDENTIFIER, T.COLON, T.IDENTIFIER, T.LEFT_BRACE, T.RIGHT_BRACE, T.EOF]),
        ("// only a comment", [T.EOF]),
        ("classy this_ _x", [T.IDENTIFIER, T.IDENTIFIER, T.IDENTIFIER, T.EOF]),
        ("nil true false", [T.NIL, T.TRUE, T.FALSE, T.EOF]),
    ],
)
def test_token_types(source, expected):
    assert _types(source) == expected


def test_literals_and_lines():
    tokens = lex('12 "two\nlines"\nname')
    assert tokens[0].literal == 12.0
    assert tokens[1].literal == "two\nlines"
    assert tokens[1].line == 2
    assert tokens[2].literal == "name"
    assert tokens[2].line == 3
    assert tokens[-1].type is T.EOF


def test_lexical_errors_are_collected():
    tokens, errors = scan('var @ = 1; #\n"open')
    assert [str(e) for e in errors] == [
        "[line 1] Unexpected character '@'.",
        "[line 1] Unexpected character '#'.",
        "[line 2] Unterminated string.",
    ]
    assert tokens[0].type is T.VAR
    with pytest.raises(PlangParseError) as exc:
        lex('var @ = 1; #\n"open')
    assert len(exc.value.errors) == 3


@pytest.mark.parametrize(
    "source,expected",
    [
        ("-123 * (34.5);", "(* (- 123) (group 34.5))"),
        ("1 + 2 * 3 - 4;", "(- (+ 1 (* 2 3)) 4)"),
        ("a = b = 1;", "(= a (= b 1))"),
        ("a.b.c = 2;", "(= (. (. a b) c) 2)"),
        ("x or y and !z;", "(or x (and y (! z)))"),
        ("f(1)(2, 3);", "(call (call f 1) 2 3)"),
        ('var s = "hi";', '(var s "hi")'),
        ("var n;", "(var n)"),
        ("print nil == false;", "(print (== nil false))"),
        ("if (a) print 1; else print 2;", "(if a (print 1) (print 2))"),
        ("while (a < 3) a = a + 1;", "(while (< a 3) (= a (+ a 1)))"),
        ("fun add(a, b) { return a + b; }", "(fun add (a b) ((return (+ a b))))"),
        ("fun (x) { return; };", "(fun (x) ((return)))"),
        (
            "class B : A { init(x) { this.x = x; } get() { return super.get(); } }",
            "(class B : A (fun init (x) ((= (. this x) x))) (fun get () ((return (call (. super get))))))",
        ),
    ],
)
def test_parse_shapes(source, expected):
    (stmt,) = parse(source)
    assert pformat(stmt) == expected


def test_for_desugars_to_while():
    (stmt,) = parse("for (var i = 0; i < 3; i = i + 1) print i;")
    assert pformat(stmt) == "(block (var i 0) (while (< i 3) (block (print i) (= i (+ i 1)))))"


def test_for_with_empty_clauses_loops_on_true():
    (stmt,) = parse("for (;;) print 1;")
    assert isinstance(stmt, ast.While)
    assert pformat(stmt) == "(while true (print 1))"


def test_anonymous_function_statement():
    (stmt,) = parse("fun (a, b) { print a; };")
    assert isinstance(stmt, ast.Expression)
    assert isinstance(stmt.expression, ast.AnonFunction)
    assert [p.lexeme for p in stmt.expression.params] == ["a", "b"]


def test_node_ids_are_unique_across_parses():
    first = parse("var a = 1; print a;")
    second = parse("var a = 1; print a;")
    ids = [s.id for s in first + second]
    assert len(set(ids)) == len(ids)
    assert second[0].id > first[-1].id


def test_nodes_compare_by_identity():
    a, b = parse("print 1; print 1;")
    assert a != b
    assert len({a, b}) == 2


@pytest.mark.parametrize(
    "source,message",
    [
        ("1 = 2;", "[line 1] Error at '=': Invalid assignment target."),
        ("print 1", "[line 1] Error at end: Expect ';' after value."),
        ("var 1 = 2;", "[line 1] Error at '1': Expect variable name."),
        ("class A : { }", "[line 1] Error at '{': Expect superclass name."),
        ("print super;", "[line 1] Error at ';': Expect '.' after 'super'."),
        ("(1 + 2;", "[line 1] Error at ';': Expect ')' after expression."),
    ],
)
def test_syntax_errors(source, message):
    with pytest.raises(PlangParseError) as exc:
        parse(source)
    assert str(exc.value) == message


def test_parser_reports_every_error_and_recovers():
    tokens, _ = scan("var = 1;\nprint 2;\nprint ;\nvar ok = 3;")
    statements, errors = Parser(tokens).parse_partial()
    assert [e.line for e in errors] == [1, 3]
    assert all(isinstance(e, PlangSyntaxError) for e in errors)
    assert [pformat(s) for s in statements] == ["(print 2)", "(var ok 3)"]


def test_too_many_arguments_is_reported():
    args = ", ".join(["1"] * (MAX_ARGUMENTS + 1))
    with pytest.raises(PlangParseError) as exc:
        parse(f"f({args});")
    assert len(exc.value.errors) == 1
    assert "Can't have more than 255 arguments." in str(exc.value)


def test_too_many_parameters_is_reported():
    params = ", ".join(f"p{i}" for i in range(MAX_ARGUMENTS + 1))
    with pytest.raises(PlangParseError) as exc:
        parse(f"fun f({params}) {{}}")
    assert "Can't have more than 255 parameters." in str(exc.value)


def test_max_arguments_is_accepted():
    args = ", ".join(["1"] * MAX_ARGUMENTS)
    (stmt,) = parse(f"f({args});")
    assert len(stmt.expression.arguments) == MAX_ARGUMENTS


@pytest.mark.parametrize(
    "source,line",
    [
        ("x;", 1),
        ("\n\n1 + y;", 3),
        ("\n(\n  a).b;", 3),
        ("\nfun (\n) {};", 2),
    ],
)
def test_line_of_expression(source, line):
    [stmt] = parse(source)
    assert ast.line_of(stmt.expression) == line


def test_line_of_bare_literal_is_unknown():
    [stmt] = parse("42;")
    assert ast.line_of(stmt.expression) is None
