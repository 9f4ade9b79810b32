from generation.schemas import (
    CodeToken,
    HeadingToken,
    ListToken,
    ParagraphToken,
    SpaceToken,
    UnknownToken,
)
from generation.tokenizer import tokenize


def _blocks(markdown):
    return [t for t in tokenize(markdown) if not isinstance(t, SpaceToken)]


def test_empty_markdown_has_no_tokens():
    assert tokenize("") == []


def test_headings_and_paragraphs():
    tokens = _blocks("# Intro\n\nHello world\n\n### Details\n")

    assert tokens == [
        HeadingToken(depth=1, text="Intro"),
        ParagraphToken(text="Hello world"),
        HeadingToken(depth=3, text="Details"),
    ]


def test_blank_lines_become_space_tokens():
    assert any(isinstance(t, SpaceToken) for t in tokenize("one\n\n\ntwo\n"))


def test_unordered_and_ordered_lists():
    tokens = _blocks("- A\n- B\n\n1. first\n2. second\n")

    assert isinstance(tokens[0], ListToken) and not tokens[0].ordered
    assert [i.text for i in tokens[0].items] == ["A", "B"]
    assert isinstance(tokens[1], ListToken) and tokens[1].ordered
    assert [i.text for i in tokens[1].items] == ["first", "second"]


def test_fenced_code_drops_trailing_newline():
    tokens = _blocks("```python\nprint(1)\nprint(2)\n```\n")
    assert tokens == [CodeToken(text="print(1)\nprint(2)")]


def test_inline_markup_is_flattened():
    tokens = _blocks("**Task 1:** build a `tree` with *care*\n")
    assert tokens == [ParagraphToken(text="Task 1: build a tree with care")]


def test_other_blocks_are_unknown():
    tokens = _blocks("> quoted\n\n---\n")
    assert tokens == [UnknownToken(kind="block_quote"), UnknownToken(kind="thematic_break")]
