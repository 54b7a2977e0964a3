"""Text codec contract and the postable-message dispatcher.

Each platform provides one :class:`FormatCodec` -- a frozen table of plain
functions -- registered under its platform tag.  Codecs are stateless, so a
single table serves every concurrent caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..markdown.grammar import parse_markdown, stringify_markdown
from ..markdown.tree import Root
from .postable import (
    CardMessage,
    MarkdownMessage,
    PlainMessage,
    PostableMessage,
    RawMessage,
    TreeMessage,
)

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


@dataclass(frozen=True)
class FormatCodec:
    """Conversion functions between one platform dialect and the canonical tree."""

    platform: str
    to_tree: Callable[[str], Root]
    from_tree: Callable[[Root], str]
    extract_plain_text: Callable[[str], str]
    render_postable: Callable[[PostableMessage], str]
    max_content_length: int

    def from_markdown(self, markdown: str) -> str:
        return self.from_tree(parse_markdown(markdown))

    def to_markdown(self, platform_text: str) -> str:
        return stringify_markdown(self.to_tree(platform_text))


def truncate_content(text: str, cap: int) -> str:
    """Clamp *text* to *cap* characters, marking the cut with ``...``."""
    if len(text) <= cap:
        return text
    logger.debug("Truncating %d chars to platform cap %d", len(text), cap)
    return text[: cap - len(ELLIPSIS)] + ELLIPSIS


def make_postable_renderer(
    from_tree: Callable[[Root], str],
    rewrite_mentions: Callable[[str], str],
    card_fallback: Callable[..., str],
) -> Callable[[PostableMessage], str]:
    """Build a ``render_postable`` function for one platform.

    Plain and raw text only get mention rewriting; markdown is parsed and
    rendered through the tree; trees render directly; cards fall back to
    their text form.
    """

    def render_postable(message: PostableMessage) -> str:
        if isinstance(message, str):
            return rewrite_mentions(message)
        if isinstance(message, PlainMessage):
            return rewrite_mentions(message.text)
        if isinstance(message, RawMessage):
            return rewrite_mentions(message.raw)
        if isinstance(message, MarkdownMessage):
            return from_tree(parse_markdown(message.markdown))
        if isinstance(message, TreeMessage):
            return from_tree(message.tree)
        if isinstance(message, CardMessage):
            return message.fallback_text or card_fallback(message.card)
        raise TypeError(f"Unsupported postable message: {type(message).__name__}")

    return render_postable
