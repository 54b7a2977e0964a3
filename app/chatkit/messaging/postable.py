"""Postable message variants accepted by the text codecs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..markdown.tree import Root
from .elements import Card


@dataclass(frozen=True, slots=True)
class FileUpload:
    filename: str
    data: bytes
    mime_type: str | None = None


@dataclass(frozen=True, slots=True)
class PlainMessage:
    """Plain text; only mention placeholders are rewritten."""

    text: str
    files: tuple[FileUpload, ...] = ()


@dataclass(frozen=True, slots=True)
class RawMessage:
    """Platform text passed through without markup translation."""

    raw: str
    files: tuple[FileUpload, ...] = ()


@dataclass(frozen=True, slots=True)
class MarkdownMessage:
    markdown: str
    files: tuple[FileUpload, ...] = ()


@dataclass(frozen=True, slots=True)
class TreeMessage:
    tree: Root
    files: tuple[FileUpload, ...] = ()


@dataclass(frozen=True, slots=True)
class CardMessage:
    """A card; on the text path it renders as its fallback text."""

    card: Card
    fallback_text: str | None = None
    files: tuple[FileUpload, ...] = ()


PostableMessage = Union[str, PlainMessage, RawMessage, MarkdownMessage, TreeMessage, CardMessage]


def files_of(message: PostableMessage) -> tuple[FileUpload, ...]:
    if isinstance(message, str):
        return ()
    return message.files
