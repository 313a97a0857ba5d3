from __future__ import annotations

"""
Static indexer for Stutter source files; nothing is evaluated.

Each top-level form is run through the real lexer and parser, so the
diagnostics match what the interpreter would report before evaluation. From
the parsed trees we collect `(def name ...)` definitions for hover,
completion and document symbols.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from stutter.errors import StutterError
from stutter.evaluation.special_forms.lambda_form import params_to_symbols
from stutter.modules.bootstrap import pad, paren_balance
from stutter.reader.lexer import TokenKind, lex
from stutter.reader.parser import Branch, Call, Leaf, Op, parse
from stutter.types.symbol import LAMBDA


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        if self.kind == "function":
            return f"({' '.join([self.name, *self.params])})"
        return self.name


@dataclass
class FormError:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    errors: List[FormError] = field(default_factory=list)
    paren_balance: int = 0


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _iter_forms(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (start offset, source) per top-level form, comments blanked out."""
    depth = 0
    start: Optional[int] = None
    in_comment = False
    chars = list(text)
    for i, ch in enumerate(text):
        if in_comment:
            if ch == "\n":
                in_comment = False
            else:
                chars[i] = " "
            continue
        if ch == ";":
            in_comment = True
            chars[i] = " "
            continue
        if ch.isspace():
            continue
        if start is None:
            start = i
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth <= 0:
                yield start, "".join(chars[start:i + 1])
                start = None
                depth = 0
    if start is not None:
        yield start, "".join(chars[start:])


def _index_def(tree: Branch, form: str, form_start: int, text: str, idx: DocumentIndex) -> None:
    target = tree.children[0] if tree.children else None
    if not (isinstance(target, Leaf) and target.token.kind is TokenKind.ID):
        return
    name = str(target.token.value)
    kind, params = "var", []
    if len(tree.children) == 2:
        value = tree.children[1]
        if isinstance(value, Branch) and isinstance(value.op, Call) and value.op.name is LAMBDA:
            kind = "function"
            try:
                params = [str(p) for p in params_to_symbols(value.children[0])]
            except (StutterError, IndexError):
                params = []
    name_at = form.find(name, form.find("def") + 3)
    line, col = _position_from_offset(text, form_start + max(name_at, 0))
    idx.symbols[name] = SymbolDef(name=name, kind=kind, line=line, col=col, params=params)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex(paren_balance=paren_balance(text))
    for start, form in _iter_forms(text):
        try:
            tokens = lex(pad(form))
            tree = parse(tokens) if tokens else None
        except StutterError as exc:
            line, col = _position_from_offset(text, start)
            idx.errors.append(FormError(message=str(exc), line=line, col=col))
            continue
        if isinstance(tree, Branch) and tree.op is Op.DEF:
            _index_def(tree, form, start, text, idx)
    return idx


# Keyword signatures for quick hover/signature help without eval
KEYWORD_SIGNATURES: Dict[str, str] = {
    "+": "(+ NUM NUM ...)",
    "-": "(- NUM NUM ...)",
    "*": "(* NUM NUM ...)",
    "/": "(/ NUM NUM ...) -> Dec",
    "%": "(% NUM NUM ...)",
    "pow": "(pow NUM NUM ...)",
    ">": "(> NUM NUM) -> Bool",
    "<": "(< NUM NUM) -> Bool",
    "=": "(= NUM NUM) -> Bool",
    ">=": "(>= NUM NUM) -> Bool",
    "<=": "(<= NUM NUM) -> Bool",
    "let": "(let (VAR EXPR) ... BODY)",
    "def": "(def VAR EXPR)",
    "lambda": "(lambda (PARAMS) EXPR)",
    "quote": "(quote ITEM)",
    "if": "(if CONDITION THEN ELSE)",
    "list": "(list ITEM ...)",
    "index": "(index NUM LIST)",
    "take": "(take NUM LIST)",
    "drop": "(drop NUM LIST)",
    "append": "(append ITEM LIST)",
    "cat": "(cat LIST LIST ...)",
    "len": "(len LIST)",
    "range": "(range LOWER UPPER)",
}
