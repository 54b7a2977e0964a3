"""Canonical rich-text tree shared by every platform dialect.

Nodes are frozen dataclasses with tuple children, so a tree handed to a
renderer cannot change underneath it.  Every node carries a ``kind`` tag
that renderers dispatch on.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True, slots=True)
class Text:
    kind: ClassVar[str] = "text"
    value: str


@dataclass(frozen=True, slots=True)
class InlineCode:
    kind: ClassVar[str] = "inline_code"
    value: str


@dataclass(frozen=True, slots=True)
class LineBreak:
    kind: ClassVar[str] = "line_break"


@dataclass(frozen=True, slots=True)
class Strong:
    kind: ClassVar[str] = "strong"
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Emphasis:
    kind: ClassVar[str] = "emphasis"
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Strikethrough:
    kind: ClassVar[str] = "strikethrough"
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Link:
    kind: ClassVar[str] = "link"
    url: str
    children: tuple[Inline, ...] = ()
    title: str | None = None


@dataclass(frozen=True, slots=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Heading:
    kind: ClassVar[str] = "heading"
    depth: int = 1
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlock:
    kind: ClassVar[str] = "code_block"
    value: str
    lang: str | None = None


@dataclass(frozen=True, slots=True)
class Blockquote:
    kind: ClassVar[str] = "blockquote"
    children: tuple[Block, ...] = ()


@dataclass(frozen=True, slots=True)
class ListItem:
    kind: ClassVar[str] = "list_item"
    children: tuple[Block, ...] = ()


@dataclass(frozen=True, slots=True)
class List:
    kind: ClassVar[str] = "list"
    children: tuple[ListItem, ...] = ()
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True, slots=True)
class ThematicBreak:
    kind: ClassVar[str] = "thematic_break"


@dataclass(frozen=True, slots=True)
class Root:
    kind: ClassVar[str] = "root"
    children: tuple[Block, ...] = ()


Inline = Union[Text, InlineCode, LineBreak, Strong, Emphasis, Strikethrough, Link]
Block = Union[Paragraph, Heading, CodeBlock, Blockquote, List, ListItem, ThematicBreak]
Node = Union[Inline, Block, Root]

# Nodes without children; everything else exposes ``children``.
LEAF_KINDS: frozenset[str] = frozenset({
    "text",
    "inline_code",
    "line_break",
    "code_block",
    "thematic_break",
})


# -- builders --------------------------------------------------------------


def text(value: str) -> Text:
    return Text(value)


def strong(children: Iterable[Inline]) -> Strong:
    return Strong(tuple(children))


def emphasis(children: Iterable[Inline]) -> Emphasis:
    return Emphasis(tuple(children))


def strikethrough(children: Iterable[Inline]) -> Strikethrough:
    return Strikethrough(tuple(children))


def inline_code(value: str) -> InlineCode:
    return InlineCode(value)


def code_block(value: str, lang: str | None = None) -> CodeBlock:
    return CodeBlock(value, lang or None)


def link(url: str, children: Iterable[Inline], title: str | None = None) -> Link:
    return Link(url, tuple(children), title)


def blockquote(children: Iterable[Block]) -> Blockquote:
    return Blockquote(tuple(children))


def paragraph(children: Iterable[Inline]) -> Paragraph:
    return Paragraph(tuple(children))


def heading(depth: int, children: Iterable[Inline]) -> Heading:
    return Heading(max(1, min(depth, 6)), tuple(children))


def list_item(children: Iterable[Block]) -> ListItem:
    return ListItem(tuple(children))


def list_(items: Iterable[ListItem], *, ordered: bool = False, start: int = 1) -> List:
    return List(tuple(items), ordered, start)


def line_break() -> LineBreak:
    return LineBreak()


def thematic_break() -> ThematicBreak:
    return ThematicBreak()


def root(children: Iterable[Block]) -> Root:
    return Root(tuple(children))


# -- traversal -------------------------------------------------------------


def children_of(node: Node) -> tuple[Node, ...]:
    if node.kind in LEAF_KINDS:
        return ()
    return node.children  # type: ignore[union-attr]


def walk(node: Node) -> Iterator[Node]:
    """Yield *node* and all of its descendants, depth first."""
    yield node
    for child in children_of(node):
        yield from walk(child)


def to_plain_text(node: Node) -> str:
    """Concatenate the literal text of a tree, dropping all formatting.

    Sibling blocks are separated by a newline so paragraphs and list items
    stay readable; inline content is joined without separators.
    """
    kind = node.kind
    if kind in ("text", "inline_code", "code_block"):
        return node.value  # type: ignore[union-attr]
    if kind == "line_break":
        return "\n"
    if kind == "thematic_break":
        return ""
    parts = [to_plain_text(child) for child in node.children]  # type: ignore[union-attr]
    if kind in ("root", "blockquote", "list", "list_item"):
        return "\n".join(p for p in parts if p)
    return "".join(parts)
