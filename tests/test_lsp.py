import pytest

pytest.importorskip("pygls")

from lsprotocol.types import CompletionItemKind, DiagnosticSeverity, SymbolKind

from stutter_lsp.indexer import KEYWORD_SIGNATURES, build_index
from stutter_lsp.server import (
    build_diagnostics,
    completion_items,
    document_symbols,
    extract_word_at,
    hover_text,
)

SOURCE = """\
; helpers
(def square (lambda (n) (* n n)))
(def limit 10)

(def add3
  (lambda (a b c) (+ a b c)))
"""


def test_index_collects_definitions():
    idx = build_index(SOURCE)
    assert set(idx.symbols) == {"square", "limit", "add3"}
    assert idx.symbols["square"].kind == "function"
    assert idx.symbols["square"].params == ["n"]
    assert idx.symbols["limit"].kind == "var"
    assert idx.symbols["add3"].signature == "(add3 a b c)"
    assert idx.errors == []
    assert idx.paren_balance == 0


def test_definition_positions():
    idx = build_index(SOURCE)
    assert (idx.symbols["square"].line, idx.symbols["square"].col) == (1, 5)
    assert (idx.symbols["add3"].line, idx.symbols["add3"].col) == (4, 5)


def test_index_reports_form_errors_by_position():
    idx = build_index("(def ok 1)\n  (let () 1)\n")
    assert len(idx.errors) == 1
    err = idx.errors[0]
    assert (err.line, err.col) == (1, 2)
    assert "empty form" in err.message


def test_index_ignores_parens_in_comments():
    idx = build_index("(def a 1) ; (((\n")
    assert idx.paren_balance == 0
    assert idx.errors == []


def test_diagnostics_for_unbalanced_document():
    idx = build_index("(def a (+ 1 2)\n")
    diags = build_diagnostics(idx)
    severities = {d.severity for d in diags}
    assert DiagnosticSeverity.Warning in severities
    assert DiagnosticSeverity.Error in severities


def test_no_diagnostics_for_clean_document():
    assert build_diagnostics(build_index(SOURCE)) == []


@pytest.mark.parametrize(
    "word, expected",
    [
        ("let", KEYWORD_SIGNATURES["let"]),
        ("square", "(square n) - function (defined at 2:6)"),
        ("limit", "limit - var (defined at 3:6)"),
        ("unknown", None),
    ],
)
def test_hover_text(word, expected):
    assert hover_text(word, build_index(SOURCE)) == expected


@pytest.mark.parametrize(
    "line, character, expected",
    [
        (1, 7, ("square", 5)),
        (1, 25, ("*", 25)),
        (2, 1, ("def", 1)),
        (0, 2, ("helpers", 2)),
        (3, 0, (None, 0)),
        (99, 0, (None, 0)),
    ],
)
def test_extract_word_at(line, character, expected):
    assert extract_word_at(SOURCE, line, character) == expected


def test_completion_includes_keywords_and_definitions():
    items = {item.label: item for item in completion_items(build_index(SOURCE))}
    assert items["range"].kind == CompletionItemKind.Keyword
    assert items["square"].kind == CompletionItemKind.Function
    assert items["limit"].kind == CompletionItemKind.Variable


def test_document_symbols():
    symbols = {s.name: s for s in document_symbols(build_index(SOURCE))}
    assert symbols["add3"].kind == SymbolKind.Function
    assert symbols["limit"].kind == SymbolKind.Variable
    assert symbols["square"].range.start.line == 1
