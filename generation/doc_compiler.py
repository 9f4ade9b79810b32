"""
Step 6 — Document Compiler

Folds a token stream into positional Google Docs edit operations.

A single cursor (next free index in the document body, starting at 1) is
threaded through the tokens in order. Each token inserts its text at the
cursor, styles exactly the range it just inserted, then moves the cursor by
the inserted length. Operations for token N+1 are therefore always computed
against the cursor left by token N.

    heading    insert text+"\\n", HEADING_<depth> paragraph style
    paragraph  insert text+"\\n"
    list       insert "<n>. " / "• " + item + "\\n" per non-blank item,
               bullets on unordered items (range excludes the newline)
    code       insert text+"\\n", Courier New 400
    space      nothing
    unknown    nothing, UnrecognizedToken diagnostic

Post-condition: final_cursor == 1 + total length of all inserted text.
"""

import logging
from typing import Iterable, List, Tuple

from generation.schemas import (
    CodeToken,
    CompileResult,
    Diagnostic,
    DiagnosticKind,
    HeadingToken,
    InsertText,
    ListToken,
    Operation,
    ParagraphToken,
    SetListBullets,
    SetParagraphStyle,
    SetTextStyle,
    SpaceToken,
    Token,
    UnknownToken,
)

log = logging.getLogger("generation.pipeline")

START_INDEX = 1
BULLET_PREFIX = "• "
BULLET_PRESET = "BULLET_ARROW_DIAMOND_DISC"
CODE_FONT_FAMILY = "Courier New"
CODE_FONT_WEIGHT = 400
FALLBACK_PREFIX = "⚠️ Formatting failed. Raw content:\n"

_KNOWN_TOKENS = (HeadingToken, ParagraphToken, ListToken, CodeToken, SpaceToken)


def doc_length(text: str) -> int:
    """Length in Google Docs index units (UTF-16 code units)."""
    return len(text.encode("utf-16-le")) // 2


# ─── Step function ─────────────────────────────────────────────────────────────

def _compile_list(cursor: int, token: ListToken) -> Tuple[List[Operation], int]:
    operations: List[Operation] = []
    for position, item in enumerate(token.items, start=1):
        if not item.text or not item.text.strip():
            continue
        prefix = f"{position}. " if token.ordered else BULLET_PREFIX
        text = prefix + item.text + "\n"
        length = doc_length(text)
        operations.append(InsertText(index=cursor, text=text))
        if not token.ordered:
            operations.append(
                SetListBullets(start=cursor, end=cursor + length - 1, preset=BULLET_PRESET)
            )
        cursor += length
    return operations, cursor


def compile_step(cursor: int, token: Token) -> Tuple[List[Operation], int]:
    """
    Operations for one token inserted at `cursor`, and the cursor after it.

    Unrecognised tokens produce nothing and leave the cursor where it was.
    """
    if isinstance(token, HeadingToken):
        text = token.text + "\n"
        end = cursor + doc_length(text)
        return [
            InsertText(index=cursor, text=text),
            SetParagraphStyle(start=cursor, end=end, style_name=f"HEADING_{token.depth}"),
        ], end

    if isinstance(token, ParagraphToken):
        text = token.text + "\n"
        return [InsertText(index=cursor, text=text)], cursor + doc_length(text)

    if isinstance(token, ListToken):
        return _compile_list(cursor, token)

    if isinstance(token, CodeToken):
        text = token.text + "\n"
        end = cursor + doc_length(text)
        return [
            InsertText(index=cursor, text=text),
            SetTextStyle(
                start=cursor, end=end, font_family=CODE_FONT_FAMILY, weight=CODE_FONT_WEIGHT
            ),
        ], end

    return [], cursor


# ─── Fold ──────────────────────────────────────────────────────────────────────

def compile_tokens(tokens: Iterable[Token], source_markdown: str = "") -> CompileResult:
    """
    Compile a token stream into an ordered operation list.

    Args:
        tokens:          Tokens in document order
        source_markdown: Original markdown, inserted verbatim if nothing compiles

    Returns:
        CompileResult(operations, final_cursor, diagnostics)
    """
    cursor = START_INDEX
    operations: List[Operation] = []
    diagnostics: List[Diagnostic] = []

    for token in tokens:
        if not isinstance(token, _KNOWN_TOKENS):
            kind = token.kind if isinstance(token, UnknownToken) else type(token).__name__
            log.warning(f"[COMPILE] Unhandled token type: {kind}")
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.UNRECOGNIZED_TOKEN,
                    message=f"Unhandled token type: {kind}",
                    details={"token_kind": kind, "cursor": cursor},
                )
            )
        step_operations, cursor = compile_step(cursor, token)
        operations.extend(step_operations)

    if not operations:
        log.warning("[COMPILE] No valid formatting requests found. Adding fallback text.")
        text = FALLBACK_PREFIX + (source_markdown or "")
        operations.append(InsertText(index=START_INDEX, text=text))
        cursor = START_INDEX + doc_length(text)
        diagnostics.append(
            Diagnostic(
                kind=DiagnosticKind.EMPTY_OUTPUT,
                message="No operations produced; inserted raw content",
                details={"source_length": len(source_markdown or "")},
            )
        )

    log.info(f"[COMPILE] {len(operations)} operations, final cursor {cursor}")
    return CompileResult(operations=operations, final_cursor=cursor, diagnostics=diagnostics)
