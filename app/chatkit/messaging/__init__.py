"""Platform-neutral message model -- elements, postables, codec contracts."""

from .cards import CardRenderer, FallbackPolicy, RenderedCard, card_to_fallback_text
from .elements import Card, Modal
from .formatting import FormatCodec, truncate_content
from .message import Message, parse_incoming
from .postable import (
    CardMessage,
    FileUpload,
    MarkdownMessage,
    PlainMessage,
    PostableMessage,
    RawMessage,
    TreeMessage,
)

__all__ = [
    "Card",
    "CardMessage",
    "CardRenderer",
    "FallbackPolicy",
    "FileUpload",
    "FormatCodec",
    "MarkdownMessage",
    "Message",
    "Modal",
    "PlainMessage",
    "PostableMessage",
    "RawMessage",
    "RenderedCard",
    "TreeMessage",
    "card_to_fallback_text",
    "parse_incoming",
    "truncate_content",
]
