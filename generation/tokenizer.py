"""
Step 5 — Markdown Tokenizer

Parses markdown with mistune (v3 AST renderer) and narrows the block tree to
the token kinds the document compiler understands:
heading, paragraph, list, code, space. Every other block type becomes an
UnknownToken carrying the mistune type name.

Inline markup is flattened to its text; emphasis, links and images keep their
visible text only. Nested lists are not modelled: only the item's own text
is kept.
"""

from typing import Any, Dict, List

import mistune

from generation.schemas import (
    CodeToken,
    HeadingToken,
    ListItem,
    ListToken,
    ParagraphToken,
    SpaceToken,
    Token,
    UnknownToken,
)

_parse = mistune.create_markdown(renderer="ast")

_LINE_BREAKS = {"softbreak", "linebreak"}
_ITEM_TEXT_BLOCKS = {"block_text", "paragraph"}


def _inline_text(nodes: List[Dict[str, Any]]) -> str:
    parts = []
    for node in nodes or []:
        node_type = node.get("type")
        if node_type in _LINE_BREAKS:
            parts.append("\n")
        elif "raw" in node:
            parts.append(node["raw"])
        else:
            parts.append(_inline_text(node.get("children", [])))
    return "".join(parts)


def _list_item_text(item: Dict[str, Any]) -> str:
    blocks = [
        _inline_text(child.get("children", []))
        for child in item.get("children", [])
        if child.get("type") in _ITEM_TEXT_BLOCKS
    ]
    return "\n".join(blocks)


def _to_token(node: Dict[str, Any]) -> Token:
    node_type = node.get("type", "")
    attrs = node.get("attrs") or {}

    if node_type == "heading":
        return HeadingToken(depth=attrs.get("level", 1), text=_inline_text(node.get("children", [])))
    if node_type == "paragraph":
        return ParagraphToken(text=_inline_text(node.get("children", [])))
    if node_type == "list":
        return ListToken(
            ordered=bool(attrs.get("ordered", False)),
            items=[ListItem(text=_list_item_text(item)) for item in node.get("children", [])],
        )
    if node_type == "block_code":
        return CodeToken(text=node.get("raw", "").rstrip("\n"))
    if node_type == "blank_line":
        return SpaceToken()
    return UnknownToken(kind=node_type or "unknown")


def tokenize(markdown: str) -> List[Token]:
    """Markdown text → ordered list of block tokens."""
    if not markdown:
        return []
    return [_to_token(node) for node in _parse(markdown)]
