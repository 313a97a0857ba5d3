import pytest
from hypothesis import given, strategies as st

from stutter.errors import StutterLexError, StutterSyntaxError
from stutter.reader.lexer import LPAREN, RPAREN, Token, TokenKind, lex, to_token
from stutter.reader.parser import Branch, Call, Leaf, Op, parse
from stutter.types.symbol import Symbol


def _kinds(tokens):
    return [t.kind for t in tokens]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", Token(TokenKind.INT, 42)),
        ("-5", Token(TokenKind.INT, -5)),
        ("+7", Token(TokenKind.INT, 7)),
        ("3.14", Token(TokenKind.DEC, 3.14)),
        ("1e3", Token(TokenKind.DEC, 1000.0)),
        ("-0.5", Token(TokenKind.DEC, -0.5)),
        ("true", Token(TokenKind.BOOL, True)),
        ("False", Token(TokenKind.BOOL, False)),
        ("-", Token(TokenKind.MINUS)),
        ("+", Token(TokenKind.PLUS)),
        (">=", Token(TokenKind.GTE)),
        ("pow", Token(TokenKind.POW)),
        ("let", Token(TokenKind.LET)),
        ("range", Token(TokenKind.RANGE)),
        ("foo", Token(TokenKind.ID, Symbol("foo"))),
        ("lambda", Token(TokenKind.ID, Symbol("lambda"))),
        ("x-1", Token(TokenKind.ID, Symbol("x-1"))),
        ("1_000", Token(TokenKind.ID, Symbol("1_000"))),
    ],
)
def test_to_token_classification(raw, expected):
    assert to_token(raw) == expected


def test_big_integer_literal_keeps_precision():
    digits = "123456789012345678901234567890123456789"
    assert to_token(digits).value == int(digits)


@pytest.mark.parametrize(
    "source, kinds",
    [
        ("(+ 1 2)", [TokenKind.LPAREN, TokenKind.PLUS, TokenKind.INT, TokenKind.INT, TokenKind.RPAREN]),
        ("(f\tx\ny) ", [TokenKind.LPAREN, TokenKind.ID, TokenKind.ID, TokenKind.ID, TokenKind.RPAREN]),
        ("((a))", [TokenKind.LPAREN, TokenKind.LPAREN, TokenKind.ID, TokenKind.RPAREN, TokenKind.RPAREN]),
        ("(a ; comment (b c)\n d)", [TokenKind.LPAREN, TokenKind.ID, TokenKind.ID, TokenKind.RPAREN]),
        ("(a;comment\n)", [TokenKind.LPAREN, TokenKind.ID, TokenKind.RPAREN]),
    ],
)
def test_lex_kinds(source, kinds):
    assert _kinds(lex(source)) == kinds


@pytest.mark.parametrize("source", ["", "   ", "\n\t", "; only a comment", "; c1\n; c2\n"])
def test_lex_empty_input(source):
    assert lex(source) == []


def test_lex_rejects_unterminated_token():
    with pytest.raises(StutterLexError, match="token not matched"):
        lex("(+ 1 2) abc")


def test_parse_nested():
    tree = parse(lex("(+ 1 (* 2 3))"))
    assert tree == Branch(
        Op.ADD,
        (
            Leaf(Token(TokenKind.INT, 1)),
            Branch(Op.MUL, (Leaf(Token(TokenKind.INT, 2)), Leaf(Token(TokenKind.INT, 3)))),
        ),
    )


def test_parse_call_by_name():
    tree = parse(lex("(f x 1)"))
    assert tree.op == Call(Symbol("f"))
    assert [str(c) for c in tree.children] == ["x", "1"]


def test_parse_single_literal_collapses_to_leaf():
    assert parse(lex("(2)")) == Leaf(Token(TokenKind.INT, 2))
    assert parse(lex("((2))")) == Leaf(Token(TokenKind.INT, 2))


def test_parse_zero_arg_call():
    assert parse(lex("(x)")) == Branch(Call(Symbol("x")), ())


def test_tree_str_round_trips_source():
    source = "(let (x 1) (+ x (f 2.5 True)))"
    assert str(parse(lex(source))) == source


@pytest.mark.parametrize(
    "source, message",
    [
        ("()", "empty form"),
        ("(+ 1 2))", "unmatched ')'"),
        (")", "unmatched ')'"),
        ("(+ 1 2", "failed to parse"),
        ("(+ 1 2) (+ 3 4)", "failed to parse"),
        ("x", "unmatched token"),
        ("((f 1) 2)", "expecting op not tree"),
        ("(1 2 3)", "cannot head a form"),
    ],
)
def test_parse_errors(source, message):
    with pytest.raises(StutterSyntaxError, match=message):
        parse(lex(source))


def test_paren_tokens_are_shared():
    tokens = lex("()")
    assert tokens[0] is LPAREN and tokens[1] is RPAREN


_ids = st.from_regex(r"[a-z][a-z0-9]{0,6}", fullmatch=True).filter(
    lambda s: to_token(s).kind is TokenKind.ID
)
_atoms = st.one_of(st.integers(min_value=-10**6, max_value=10**6).map(str), _ids)


@st.composite
def _forms(draw, depth=3):
    head = draw(_ids)
    if depth == 0:
        args = draw(st.lists(_atoms, max_size=3))
    else:
        args = draw(st.lists(st.one_of(_atoms, _forms(depth=depth - 1)), max_size=3))
    return f"({' '.join([head, *args])})"


@given(_forms())
def test_parse_str_is_stable(source):
    assert str(parse(lex(source))) == source
