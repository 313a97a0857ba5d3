"""
  Stutter Lexer

Splits source text into a flat list of Tokens. Parentheses are always their
own token, whitespace and `;` end the raw token being accumulated, and `;`
starts a comment that runs to the end of the line.

Raw tokens are classified in a fixed order:

    integer -> float -> boolean -> keyword -> identifier

so `-` is the subtraction keyword while `-5` is an Int, and `1e3` is a Dec.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from stutter.config import unlimited_int_digits
from stutter.errors import StutterLexError
from stutter.types.symbol import Symbol


class TokenKind(Enum):
    LPAREN = "("
    RPAREN = ")"
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    SLASH = "/"
    PERCENT = "%"
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
    INT = "int"
    DEC = "dec"
    BOOL = "bool"
    ID = "id"


LITERAL_KINDS = frozenset({TokenKind.INT, TokenKind.DEC, TokenKind.BOOL})

# Fixed punctuation and keywords, recognised verbatim.
KEYWORDS: dict[str, TokenKind] = {
    kind.value: kind
    for kind in TokenKind
    if kind not in LITERAL_KINDS and kind is not TokenKind.ID
}

BOOLEANS: dict[str, bool] = {
    "true": True,
    "false": False,
    "True": True,
    "False": False,
}

INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Union[int, float, bool, Symbol, None] = None

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.value
        if self.kind is TokenKind.BOOL:
            return "True" if self.value else "False"
        if self.kind is TokenKind.INT:
            with unlimited_int_digits():
                return str(self.value)
        return str(self.value)


LPAREN = Token(TokenKind.LPAREN)
RPAREN = Token(TokenKind.RPAREN)


def _parse_float(raw: str) -> float | None:
    # Python's float() also accepts digit separators; raw tokens never carry them.
    if "_" in raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def to_token(raw: str) -> Token:
    """Classify one raw token."""
    if INT_RE.fullmatch(raw):
        with unlimited_int_digits():
            return Token(TokenKind.INT, int(raw))
    dec = _parse_float(raw)
    if dec is not None:
        return Token(TokenKind.DEC, dec)
    if raw in BOOLEANS:
        return Token(TokenKind.BOOL, BOOLEANS[raw])
    kind = KEYWORDS.get(raw)
    if kind is not None:
        return Token(kind)
    return Token(TokenKind.ID, Symbol(raw))


def lex(source: str) -> list[Token]:
    tokens: list[Token] = []
    raw: list[str] = []
    in_comment = False

    def flush():
        if raw:
            tokens.append(to_token("".join(raw)))
            raw.clear()

    for ch in source:
        if in_comment:
            if ch == "\n":
                in_comment = False
            continue
        if ch == ";":
            flush()
            in_comment = True
        elif ch == "(":
            flush()
            tokens.append(LPAREN)
        elif ch == ")":
            flush()
            tokens.append(RPAREN)
        elif ch.isspace():
            flush()
        else:
            raw.append(ch)

    if raw:
        raise StutterLexError(f"Invalid syntax, token not matched: {''.join(raw)!r}")
    return tokens
