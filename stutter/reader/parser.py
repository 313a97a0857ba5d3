"""
  Stutter Parser

Turns a token list into a single parse tree with an explicit stack machine
instead of recursive descent:

    - every token except `)` is pushed
    - on `)` items are popped until the matching `(`; the first item inside
      the parentheses becomes the branch operator, the rest its children
    - the finished Branch is pushed back as one item

    (+ 1 (* 2 3))  ->  Branch(Op.ADD, [Leaf(1), Branch(Op.MUL, [Leaf(2), Leaf(3)])])
    (f x y)        ->  Branch(Call(f), [Leaf(x), Leaf(y)])
    (2)            ->  Leaf(2)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from stutter.errors import StutterSyntaxError
from stutter.reader.lexer import LITERAL_KINDS, Token, TokenKind
from stutter.types.symbol import Symbol


class Op(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "pow"
    GT = ">"
    LT = "<"
    EQ = "="
    GTE = ">="
    LTE = "<="
    LET = "let"
    DEF = "def"
    LIST = "list"
    INDEX = "index"
    DROP = "drop"
    QUOTE = "quote"
    APPEND = "append"
    RANGE = "range"
    CAT = "cat"
    LEN = "len"
    TAKE = "take"
    IF = "if"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Call:
    """Operator of a branch headed by an identifier: call by name."""
    name: Symbol

    def __str__(self) -> str:
        return str(self.name)


Operator = Union[Op, Call]


@dataclass(frozen=True)
class Leaf:
    token: Token

    def __str__(self) -> str:
        return str(self.token)


@dataclass(frozen=True)
class Branch:
    op: Operator
    children: tuple[ParseTree, ...] = ()

    def __str__(self) -> str:
        parts = [str(self.op), *(str(c) for c in self.children)]
        return f"({' '.join(parts)})"


ParseTree = Union[Leaf, Branch]

# Keyword tokens map one-to-one onto fixed operators by their spelling.
_KEYWORD_OPS: dict[TokenKind, Op] = {TokenKind(op.value): op for op in Op}


def token_to_op(tok: Token) -> Operator:
    if tok.kind is TokenKind.ID:
        return Call(tok.value)
    op = _KEYWORD_OPS.get(tok.kind)
    if op is None:
        raise StutterSyntaxError(f"invalid op: {tok}")
    return op


def _close_branch(items: list[ParseTree]) -> ParseTree:
    """Build the tree for one matched pair of parentheses.

    `items` holds what was between the parentheses, innermost (last) first.
    """
    if not items:
        raise StutterSyntaxError("syntax error, empty form ()")
    items.reverse()
    head, children = items[0], items[1:]
    if isinstance(head, Branch):
        raise StutterSyntaxError(f"syntax error, expecting op not tree: {head}")
    if head.token.kind in LITERAL_KINDS:
        if children:
            raise StutterSyntaxError(f"syntax error, literal {head} cannot head a form")
        return head
    return Branch(token_to_op(head.token), tuple(children))


def parse(tokens: list[Token]) -> ParseTree:
    stack: list[Token | ParseTree] = []
    for tok in tokens:
        if tok.kind is not TokenKind.RPAREN:
            stack.append(tok)
            continue
        items: list[ParseTree] = []
        while True:
            if not stack:
                raise StutterSyntaxError("syntax error, unmatched ')'")
            item = stack.pop()
            if isinstance(item, Token):
                if item.kind is TokenKind.LPAREN:
                    break
                item = Leaf(item)
            items.append(item)
        stack.append(_close_branch(items))

    if len(stack) != 1:
        raise StutterSyntaxError("syntax error, failed to parse")
    top = stack[0]
    if isinstance(top, Token):
        raise StutterSyntaxError(f"syntax error, ended with unmatched token: {top}")
    return top
