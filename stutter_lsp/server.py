from __future__ import annotations

"""
A minimal pygls-based Language Server for Stutter.

Features:
- Text synchronization (documents are read back from the pygls workspace)
- Diagnostics: lex/syntax errors per top-level form, unbalanced parens
- Hover: keyword signatures and `def`-ined names
- Completion: keywords and document definitions
- Document Symbols: `def`-ined names

Note: We never evaluate the buffer. We build a static index per document.
"""

import logging
import sys
from typing import Dict, List, Optional, Tuple

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from stutter.config import get_log_level
from stutter_lsp.indexer import KEYWORD_SIGNATURES, DocumentIndex, build_index

logger = logging.getLogger(__name__)

SOURCE = "stutter-ls"


class StutterLanguageServer(LanguageServer):
    CMD_NAME = "stutter-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.indexes: Dict[str, DocumentIndex] = {}


ls = StutterLanguageServer()


# --- Pure helpers ---
def _mk_range(line: int, col: int, width: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + width))


def build_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = [
        Diagnostic(
            range=_mk_range(err.line, err.col),
            message=err.message,
            severity=DiagnosticSeverity.Error,
            source=SOURCE,
        )
        for err in idx.errors
    ]
    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    return diags


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in KEYWORD_SIGNATURES:
        return KEYWORD_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{sdef.signature} - {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"
    return None


def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=sig)
        for name, sig in KEYWORD_SIGNATURES.items()
    ]
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind, detail=sdef.signature))
    return items


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.signature,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


def extract_word_at(text: str, line: int, character: int) -> Tuple[Optional[str], int]:
    """Return the word under the cursor and the column it starts at."""
    lines = text.splitlines(True)
    if line >= len(lines):
        return None, character
    current = lines[line]
    start = min(character, len(current))
    while start > 0 and current[start - 1] not in " \t()\n\r;":
        start -= 1
    end = min(character, len(current))
    while end < len(current) and current[end] not in " \t()\n\r;":
        end += 1
    word = current[start:end]
    return (word if word else None), start


# --- Text sync ---
def _refresh(ls: StutterLanguageServer, uri: str) -> None:
    text = ls.workspace.get_text_document(uri).source
    idx = build_index(text)
    ls.indexes[uri] = idx
    ls.publish_diagnostics(uri, build_diagnostics(idx))


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: StutterLanguageServer, params: DidOpenTextDocumentParams):
    _refresh(ls, params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: StutterLanguageServer, params: DidChangeTextDocumentParams):
    _refresh(ls, params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: StutterLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.indexes.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: StutterLanguageServer, params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    idx = ls.indexes.get(uri)
    if idx is None:
        return None
    text = ls.workspace.get_text_document(uri).source
    word, _ = extract_word_at(text, params.position.line, params.position.character)
    contents = hover_text(word, idx) if word else None
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: StutterLanguageServer, params: CompletionParams) -> CompletionList:
    idx = ls.indexes.get(params.text_document.uri, DocumentIndex())
    return CompletionList(is_incomplete=False, items=completion_items(idx))


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(ls: StutterLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    idx = ls.indexes.get(params.text_document.uri)
    if idx is None:
        return None
    return document_symbols(idx)


def main() -> int:
    # stdout carries the protocol; logs go to stderr.
    logging.basicConfig(level=get_log_level(), stream=sys.stderr)
    logger.info("starting %s over stdio", ls.CMD_NAME)
    ls.start_io()
    return 0


if __name__ == "__main__":
    sys.exit(main())
