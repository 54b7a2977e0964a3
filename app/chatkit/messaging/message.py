"""Inbound message normalisation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..markdown.grammar import stringify_markdown
from ..markdown.tree import Root


@dataclass(frozen=True)
class Attachment:
    name: str
    url: str | None = None
    mime_type: str | None = None
    size: int | None = None


@dataclass(frozen=True)
class Author:
    user_id: str
    user_name: str
    is_bot: bool = False


@dataclass(frozen=True)
class Message:
    """A platform message in canonical form.

    *raw* is the text exactly as received, *formatted* its canonical tree
    and *text* the plain-text projection of that tree.
    """

    id: str
    platform: str
    raw: str
    formatted: Root
    text: str
    author: Author
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

    def to_markdown(self) -> str:
        return stringify_markdown(self.formatted)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "platform": self.platform,
            "raw": self.raw,
            "text": self.text,
            "markdown": self.to_markdown(),
            "author": {
                "user_id": self.author.user_id,
                "user_name": self.author.user_name,
                "is_bot": self.author.is_bot,
            },
            "attachments": [
                {"name": a.name, "url": a.url, "mime_type": a.mime_type, "size": a.size}
                for a in self.attachments
            ],
        }


def parse_incoming(
    platform: str,
    text: str,
    *,
    message_id: str = "",
    author_id: str = "unknown",
    author_name: str | None = None,
    is_bot: bool = False,
    attachments: Iterable[Attachment] = (),
) -> Message:
    """Build a :class:`Message` from *platform* text.

    Raises ``ValueError`` for an unknown platform tag.
    """
    from ..platforms import get_codec

    codec = get_codec(platform)
    tree = codec.to_tree(text)
    return Message(
        id=message_id,
        platform=platform,
        raw=text,
        formatted=tree,
        text=codec.extract_plain_text(text),
        author=Author(author_id, author_name or author_id, is_bot),
        attachments=tuple(attachments),
    )
