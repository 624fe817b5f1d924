from __future__ import annotations

"""
A minimal pygls-based Language Server for Plang.

Features:
- Text synchronization and document store
- Diagnostics: lexer, parser and resolver errors with their lines
- Hover: native signatures, keywords and declared symbols
- Completion: keywords, natives and declared names; methods after `Class.`
- Signature Help: for declared functions, classes (their init) and natives
- Document Symbols: classes with their methods, functions, variables

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from pygls.server import LanguageServer
from lsprotocol.types import (
    CompletionOptions,
    SignatureHelpOptions,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    SignatureHelp,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from plang import __version__
from plang_lsp.indexer import (
    BUILTIN_SIGNATURES,
    KEYWORD_DOCS,
    DocumentIndex,
    SymbolDef,
    build_index,
)

logger = logging.getLogger(__name__)

WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

SYMBOL_KINDS = {
    "class": SymbolKind.Class,
    "function": SymbolKind.Function,
    "method": SymbolKind.Method,
    "var": SymbolKind.Variable,
}

COMPLETION_KINDS = {
    "class": CompletionItemKind.Class,
    "function": CompletionItemKind.Function,
    "method": CompletionItemKind.Method,
    "var": CompletionItemKind.Variable,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class PlangLanguageServer(LanguageServer):
    CMD_NAME = "plang-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}


ls = PlangLanguageServer()


# --- Text sync ---
def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    logger.debug("Indexed %s: %d symbols, %d problems", uri, len(idx.symbols), len(idx.problems))
    _publish_diagnostics(uri, idx)


@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _line_range(text: str, line: int) -> Range:
    lines = text.splitlines()
    end = len(lines[line]) if line < len(lines) else 0
    return Range(start=Position(line=line, character=0), end=Position(line=line, character=end))


def to_diagnostics(text: str, idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=_line_range(text, problem.line),
            message=problem.message,
            severity=(
                DiagnosticSeverity.Error
                if problem.severity == "error"
                else DiagnosticSeverity.Warning
            ),
            source=ls.CMD_NAME,
        )
        for problem in idx.problems
    ]


def _publish_diagnostics(uri: str, idx: DocumentIndex):
    ls.publish_diagnostics(uri, to_diagnostics(ls.documents[uri].text, idx))


# --- Hover ---
def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return f"{BUILTIN_SIGNATURES[word]} (native)"
    if word in KEYWORD_DOCS:
        return KEYWORD_DOCS[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        for owner in idx.symbols.values():
            sdef = next((m for m in owner.children if m.name == word), None)
            if sdef is not None:
                break
    if sdef is None:
        return None
    return f"{sdef.signature} ({sdef.kind}, defined at {sdef.line + 1}:{sdef.col + 1})"


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = _extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = hover_text(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex, prefix: str) -> List[CompletionItem]:
    # After `Name.` offer that class's methods
    m = re.search(r"([A-Za-z_][A-Za-z0-9_]*)\.\w*$", prefix)
    if m and m.group(1) in idx.symbols and idx.symbols[m.group(1)].kind == "class":
        return [
            CompletionItem(label=method.name, kind=CompletionItemKind.Method, detail=method.signature)
            for method in idx.symbols[m.group(1)].children
        ]

    items: List[CompletionItem] = []
    for word, doc in KEYWORD_DOCS.items():
        items.append(CompletionItem(label=word, kind=CompletionItemKind.Keyword, detail=doc))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        items.append(CompletionItem(label=name, kind=COMPLETION_KINDS[sdef.kind], detail=sdef.signature))
    return items


@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=["."]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    prefix = _get_line_prefix(state.text, params.position)
    return CompletionList(is_incomplete=False, items=completion_items(state.index, prefix))


# --- Signature Help ---
def signature_for(idx: DocumentIndex, prefix: str) -> Optional[SignatureHelp]:
    callee, active = _extract_call_context(prefix)
    if not callee:
        return None

    if callee in BUILTIN_SIGNATURES:
        label = BUILTIN_SIGNATURES[callee]
        params: List[str] = re.findall(r"\w+", label[label.find("(") :])
    elif callee in idx.symbols and idx.symbols[callee].kind != "var":
        sdef = idx.symbols[callee]
        params = list(sdef.params)
        label = f"{sdef.name}({', '.join(params)})"
    else:
        return None

    return SignatureHelp(
        signatures=[
            SignatureInformation(
                label=label, parameters=[ParameterInformation(label=p) for p in params]
            )
        ],
        active_signature=0,
        active_parameter=min(active, max(len(params) - 1, 0)),
    )


@ls.feature("textDocument/signatureHelp", SignatureHelpOptions(trigger_characters=["(", ","]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return signature_for(state.index, _get_line_prefix(state.text, params.position))


# --- Document Symbols ---
def _symbol(sdef: SymbolDef) -> DocumentSymbol:
    rng = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
    )
    return DocumentSymbol(
        name=sdef.name,
        detail=sdef.signature,
        kind=SYMBOL_KINDS[sdef.kind],
        range=rng,
        selection_range=rng,
        children=[_symbol(child) for child in sdef.children] or None,
    )


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    return [_symbol(sdef) for sdef in idx.symbols.values()]


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


# --- Helpers ---

def _get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    for m in WORD_RE.finditer(lines[pos.line]):
        if m.start() <= pos.character <= m.end():
            return m.group()
    return None


def _extract_call_context(prefix: str) -> tuple[Optional[str], int]:
    """Name called by the innermost unclosed `(` before the cursor, and the argument index."""
    depth = 0
    commas = 0
    for i in range(len(prefix) - 1, -1, -1):
        ch = prefix[i]
        if ch == ")":
            depth += 1
        elif ch == "(":
            if depth == 0:
                m = re.search(r"([A-Za-z_][A-Za-z0-9_]*)\s*$", prefix[:i])
                return (m.group(1) if m else None), commas
            depth -= 1
        elif ch == "," and depth == 0:
            commas += 1
    return None, 0


def main():
    logging.basicConfig(level=logging.INFO)
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
