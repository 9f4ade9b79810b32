"""
Content → Google Docs operations.

Accepts whatever the caller holds for an assignment: a validated record, the
model's JSON (fenced or not), or narrative markdown. JSON-looking content is
rendered through the markdown renderer first; markdown passes straight to the
tokenizer and compiler.
"""

import logging
from typing import Any, Mapping, Optional, Union

from generation.doc_compiler import compile_tokens
from generation.markdown_renderer import render_markdown
from generation.schemas import AssignmentRecord, CompileResult, RenderDefaults
from generation.tokenizer import tokenize
from generation.validator import decode_envelope

log = logging.getLogger("generation.pipeline")

Content = Union[AssignmentRecord, Mapping[str, Any], str]


def looks_like_json(text: str) -> bool:
    trimmed = text.strip()
    return trimmed.startswith("{") or trimmed.startswith("```json")


def prepare_markdown(content: Content, defaults: Optional[RenderDefaults] = None) -> str:
    """
    Resolve content to the markdown that will be inserted.

    Raises MalformedEnvelope / MalformedJSON if content looks like JSON but
    cannot be decoded.
    """
    if isinstance(content, (AssignmentRecord, Mapping)):
        return render_markdown(content, defaults)

    text = content or ""
    if looks_like_json(text):
        log.info("[DOCS] Detected assignment JSON content. Converting to Markdown...")
        return render_markdown(decode_envelope(text), defaults)
    return text


def build_operations(content: Content, defaults: Optional[RenderDefaults] = None) -> CompileResult:
    """prepare_markdown → tokenize → compile_tokens."""
    markdown = prepare_markdown(content, defaults)
    return compile_tokens(tokenize(markdown), source_markdown=markdown)
