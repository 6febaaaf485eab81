import sys

import pytest
from hypothesis import given, strategies as st

from swisp.reader.parser import (
    IDENTIFIER_CHARS,
    NUMBER_RE,
    RECURSION_LIMIT_ERROR,
    Reader,
    parse,
)
from swisp.types.expression import (
    INT64_MAX,
    INT64_MIN,
    Error,
    Number,
    QExpr,
    SExpr,
    Str,
    Symbol,
)


def _single(source):
    """Parse `source` and unwrap the one top-level form."""
    result = parse(source)
    assert isinstance(result, SExpr), result
    assert len(result) == 1
    return result[0]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("123", Number(123)),
        ("-45", Number(-45)),
        ("007", Number(7)),
        ("-", Symbol("-")),
        ("-x", Symbol("-x")),
        ("1a", Symbol("1a")),
        ("--1", Symbol("--1")),
        ("1-2", Symbol("1-2")),
        ("head", Symbol("head")),
        ("\\", Symbol("\\")),
        ("&", Symbol("&")),
        ("<=", Symbol("<=")),
        ("!=", Symbol("!=")),
        ("snake_case", Symbol("snake_case")),
        ('"hello"', Str("hello")),
        ('""', Str("")),
        ("(a b c)", SExpr([Symbol("a"), Symbol("b"), Symbol("c")])),
        ("{1 2}", QExpr([Number(1), Number(2)])),
        ("()", SExpr()),
        ("{}", QExpr()),
    ]
)
def test_parser(source, expected):
    assert _single(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        (r'"a\nb"', "a\nb"),
        (r'"a\rb"', "a\rb"),
        (r'"a\tb"', "a\tb"),
        (r'"a\\b"', "a\\b"),
        (r'"it\'s"', "it's"),
        (r'"say \"hi\""', 'say "hi"'),
    ]
)
def test_string_escapes(source, expected):
    assert _single(source) == Str(expected)


def test_nested_lists():
    source = "((a b) {c (d)})"
    expected = SExpr([
        SExpr([Symbol("a"), Symbol("b")]),
        QExpr([Symbol("c"), SExpr([Symbol("d")])]),
    ])
    assert _single(source) == expected


def test_top_level_wraps_all_forms():
    result = parse("+ 1 (* 2 3)")
    assert result == SExpr([
        Symbol("+"),
        Number(1),
        SExpr([Symbol("*"), Number(2), Number(3)]),
    ])


@pytest.mark.parametrize(
    "source",
    [
        "",
        "    ",
        "; comment only",
        "\t\r\n",
    ]
)
def test_empty_input(source):
    assert parse(source) == SExpr()


def test_comments_are_skipped():
    source = "(+ 1 ; one\n 2) ; trailing"
    assert _single(source) == SExpr([Symbol("+"), Number(1), Number(2)])


def test_tokens_need_no_separator_around_brackets():
    assert _single("(head{1 2})") == SExpr([
        Symbol("head"), QExpr([Number(1), Number(2)]),
    ])


@pytest.mark.parametrize(
    "source, message",
    [
        ("(+ 1 2", "Unexpected end of input"),
        ("{1 {2}", "Unexpected end of input"),
        ('"abc', "Unexpected end of input"),
        ('"abc\\', "Unexpected end of input"),
        (r'"\q"', "Invalid escape sequence \\q"),
        ("9223372036854775808", "Invalid number 9223372036854775808"),
        ("-9223372036854775809", "Invalid number -9223372036854775809"),
        ("(+ 1 2))", "Unexpected character ) at index 7"),
        ("{1 2)", "Unexpected character ) at index 4"),
        ("(a . b)", "Unexpected character . at index 3"),
    ]
)
def test_malformed_input(source, message):
    assert parse(source) == Error(message)


def test_int64_bounds_are_numbers():
    assert _single(str(INT64_MAX)) == Number(INT64_MAX)
    assert _single(str(INT64_MIN)) == Number(INT64_MIN)


def test_error_short_circuits_siblings():
    # The bad escape wins even though a later sibling is also malformed
    assert parse(r'(a "\x" 99999999999999999999)') == Error("Invalid escape sequence \\x")


def test_reader_position_advances():
    reader = Reader("foo (bar)")
    assert reader.read() == Symbol("foo")
    assert reader.read() == SExpr([Symbol("bar")])
    assert reader.peek() is None


def test_nesting_beyond_host_stack_is_an_error_value():
    depth = sys.getrecursionlimit() + 10
    source = "(" * depth + "1" + ")" * depth
    assert parse(source) == Error(RECURSION_LIMIT_ERROR)


def test_moderate_nesting_reads():
    nested = _single("{" * 50 + "}" * 50)
    for _ in range(49):
        assert isinstance(nested, QExpr) and len(nested) == 1
        nested = nested[0]
    assert nested == QExpr()


# -------------------------------
# Strategies
# -------------------------------
symbol_strat = st.text(
    st.sampled_from(sorted(IDENTIFIER_CHARS)), min_size=1, max_size=10
).filter(lambda s: not NUMBER_RE.fullmatch(s)).map(Symbol)

number_strat = st.integers(min_value=INT64_MIN, max_value=INT64_MAX).map(Number)

string_strat = st.text(max_size=20).map(Str)

atom_strat = st.one_of(symbol_strat, number_strat, string_strat)

expr_strat = st.recursive(
    atom_strat,
    lambda children: st.lists(children, max_size=5).map(QExpr),
    max_leaves=20,
)


# -------------------------------
# Hypothesis tests
# -------------------------------
@given(expr_strat)
def test_render_then_parse_roundtrip(expr):
    assert parse(str(expr)) == SExpr([expr])


@given(st.text(max_size=40))
def test_parser_never_raises(source):
    result = parse(source)
    assert isinstance(result, (SExpr, Error))
