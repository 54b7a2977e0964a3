"""Helpers shared by the platform text codecs.

Platform token rewriting runs as plain regex substitution around the shared
grammar.  Code spans must survive those passes byte-for-byte, so they are
stashed behind placeholders first and restored afterwards.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from . import tree as t

_CODE_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)
_CODE_SPAN_RE = re.compile(r"`[^`\n]+`")
_PLACEHOLDER = "\x00PH{}\x00"


class CodeStash:
    """Swap code spans for placeholders while regex passes run."""

    def __init__(self) -> None:
        self._stashed: list[str] = []

    def _stash(self, m: re.Match) -> str:
        idx = len(self._stashed)
        self._stashed.append(m.group(0))
        return _PLACEHOLDER.format(idx)

    def hide(self, text: str) -> str:
        text = _CODE_FENCE_RE.sub(self._stash, text)
        return _CODE_SPAN_RE.sub(self._stash, text)

    def restore(self, text: str) -> str:
        for idx, original in enumerate(self._stashed):
            text = text.replace(_PLACEHOLDER.format(idx), original, 1)
        return text


def rewrite_outside_code(text: str, rewrite: Callable[[str], str]) -> str:
    stash = CodeStash()
    return stash.restore(rewrite(stash.hide(text)))


def join_blocks(parts: list[str]) -> str:
    return "\n\n".join(p for p in parts if p)


def quote_lines(body: str) -> str:
    return "\n".join(f"> {line}" if line else ">" for line in body.split("\n"))


def join_item_blocks(blocks: tuple[t.Block, ...], render_block: Callable[[t.Node], str]) -> str:
    """Join the blocks of one container item.

    A nested list follows its lead paragraph directly; any other pair of
    blocks needs a blank line or it would merge into one paragraph.
    """
    out = ""
    for i, block in enumerate(blocks):
        if i:
            out += "\n" if block.kind == "list" else "\n\n"
        out += render_block(block)
    return out


def render_list(
    node: t.List,
    render_block: Callable[[t.Node], str],
    bullet: str,
) -> str:
    """Render list items with *bullet* (or numbers).

    Continuation lines are indented to the item's content column, so nested
    blocks stay inside their item under both ``-`` and ``10.`` prefixes.
    """
    lines: list[str] = []
    for i, item in enumerate(node.children):
        prefix = f"{node.start + i}." if node.ordered else bullet
        pad = " " * (len(prefix) + 1)
        first, *rest = join_item_blocks(item.children, render_block).split("\n")
        lines.append(f"{prefix} {first}")
        lines.extend(f"{pad}{line}" if line else line for line in rest)
    return "\n".join(lines)


def dispatch(
    table: dict[str, Callable[[t.Node], str]],
    node: t.Node,
) -> str:
    try:
        renderer = table[node.kind]
    except (KeyError, AttributeError):
        raise TypeError(f"Unsupported node kind: {getattr(node, 'kind', type(node).__name__)!r}") from None
    return renderer(node)
