"""Shared markdown grammar -- parses CommonMark (+ strikethrough) into the
canonical tree and stringifies the tree back to standard markdown.

Parsing is total: any construct the tree has no node for (raw HTML, images,
tables) degrades to literal text rather than failing.
"""

from __future__ import annotations

import logging

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from . import tree as t
from .render import join_item_blocks

logger = logging.getLogger(__name__)

# Raw HTML stays disabled so stray ``<...>`` tokens remain plain text.
_md = MarkdownIt("commonmark", {"html": False}).enable("strikethrough")


def parse_markdown(markdown: str) -> t.Root:
    """Parse a markdown string into a canonical :class:`~tree.Root`."""
    if not markdown:
        return t.root([])
    syntax = SyntaxTreeNode(_md.parse(markdown))
    return t.root(_blocks(syntax.children))


def markdown_to_plain_text(markdown: str) -> str:
    return t.to_plain_text(parse_markdown(markdown))


# -- markdown-it syntax tree -> canonical tree ------------------------------


def _blocks(nodes: list[SyntaxTreeNode]) -> list[t.Block]:
    out: list[t.Block] = []
    for node in nodes:
        block = _block(node)
        if block is not None:
            out.append(block)
    return out


def _block(node: SyntaxTreeNode) -> t.Block | None:
    kind = node.type
    if kind == "paragraph":
        return t.paragraph(_inline_children(node))
    if kind == "heading":
        return t.heading(int(node.tag[1:]), _inline_children(node))
    if kind == "blockquote":
        return t.blockquote(_blocks(node.children))
    if kind in ("bullet_list", "ordered_list"):
        start = node.attrs.get("start", 1) if kind == "ordered_list" else 1
        items = [t.list_item(_blocks(item.children)) for item in node.children]
        return t.list_(items, ordered=kind == "ordered_list", start=int(start))
    if kind == "fence":
        lang = node.info.strip().split(" ", 1)[0] if node.info else None
        return t.code_block(node.content.removesuffix("\n"), lang)
    if kind == "code_block":
        return t.code_block(node.content.removesuffix("\n"))
    if kind == "hr":
        return t.thematic_break()
    if kind == "inline":
        return t.paragraph(_inlines(node.children))
    logger.debug("Degrading unsupported block %r to text", kind)
    literal = _literal(node)
    return t.paragraph([t.text(literal)]) if literal else None


def _inline_children(node: SyntaxTreeNode) -> list[t.Inline]:
    inlines: list[t.Inline] = []
    for child in node.children:
        if child.type == "inline":
            inlines.extend(_inlines(child.children))
        else:
            inlines.extend(_inlines([child]))
    return _merge_text(inlines)


def _inlines(nodes: list[SyntaxTreeNode]) -> list[t.Inline]:
    out: list[t.Inline] = []
    for node in nodes:
        kind = node.type
        if kind == "text":
            out.append(t.text(node.content))
        elif kind == "softbreak":
            out.append(t.text("\n"))
        elif kind == "hardbreak":
            out.append(t.line_break())
        elif kind == "code_inline":
            out.append(t.inline_code(node.content))
        elif kind == "strong":
            out.append(t.strong(_inlines(node.children)))
        elif kind == "em":
            out.append(t.emphasis(_inlines(node.children)))
        elif kind == "s":
            out.append(t.strikethrough(_inlines(node.children)))
        elif kind == "link":
            title = node.attrs.get("title")
            out.append(t.link(str(node.attrs.get("href", "")), _inlines(node.children), str(title) if title else None))
        elif kind == "image":
            # Images have no inline node; keep them reachable as a link.
            alt = _literal(node) or str(node.attrs.get("src", ""))
            out.append(t.link(str(node.attrs.get("src", "")), [t.text(alt)]))
        else:
            literal = _literal(node)
            if literal:
                out.append(t.text(literal))
    return _merge_text(out)


def _merge_text(nodes: list[t.Inline]) -> list[t.Inline]:
    merged: list[t.Inline] = []
    for node in nodes:
        if merged and node.kind == "text" and merged[-1].kind == "text":
            merged[-1] = t.text(merged[-1].value + node.value)  # type: ignore[union-attr]
        else:
            merged.append(node)
    return merged


def _literal(node: SyntaxTreeNode) -> str:
    if node.children:
        return "".join(_literal(child) for child in node.children)
    return node.content or ""


# -- canonical tree -> standard markdown -------------------------------------


def stringify_markdown(root: t.Root) -> str:
    """Render a canonical tree as standard (GFM-flavoured) markdown."""
    return "\n\n".join(_md_block(child) for child in root.children).strip("\n")


def _md_block(node: t.Node) -> str:
    kind = node.kind
    if kind == "paragraph":
        return _md_inlines(node.children)
    if kind == "heading":
        return f"{'#' * node.depth} {_md_inlines(node.children)}"
    if kind == "code_block":
        return f"```{node.lang or ''}\n{node.value}\n```"
    if kind == "blockquote":
        inner = "\n\n".join(_md_block(child) for child in node.children)
        return "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
    if kind == "list":
        lines = []
        for i, item in enumerate(node.children):
            prefix = f"{node.start + i}." if node.ordered else "-"
            lines.append(_prefixed(prefix, _md_item(item)))
        return "\n".join(lines)
    if kind == "list_item":
        return _md_item(node)
    if kind == "thematic_break":
        return "---"
    return _md_inlines([node])


def _md_item(item: t.ListItem) -> str:
    return join_item_blocks(item.children, _md_block)


def _prefixed(prefix: str, body: str) -> str:
    pad = " " * (len(prefix) + 1)
    first, *rest = body.split("\n") or [""]
    return "\n".join([f"{prefix} {first}", *(f"{pad}{line}" if line else line for line in rest)])


def _md_inlines(nodes: tuple[t.Inline, ...] | list[t.Inline]) -> str:
    out: list[str] = []
    for node in nodes:
        kind = node.kind
        if kind == "text":
            out.append(node.value)
        elif kind == "inline_code":
            out.append(f"`{node.value}`")
        elif kind == "line_break":
            out.append("\\\n")
        elif kind == "strong":
            out.append(f"**{_md_inlines(node.children)}**")
        elif kind == "emphasis":
            out.append(f"*{_md_inlines(node.children)}*")
        elif kind == "strikethrough":
            out.append(f"~~{_md_inlines(node.children)}~~")
        elif kind == "link":
            out.append(f"[{_md_inlines(node.children)}]({node.url})")
        else:
            raise TypeError(f"Unsupported inline node kind: {kind!r}")
    return "".join(out)
