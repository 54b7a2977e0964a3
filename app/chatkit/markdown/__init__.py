"""Canonical rich-text tree and the shared markdown grammar."""

from .grammar import markdown_to_plain_text, parse_markdown, stringify_markdown
from .tree import Root, to_plain_text, walk

__all__ = [
    "Root",
    "markdown_to_plain_text",
    "parse_markdown",
    "stringify_markdown",
    "to_plain_text",
    "walk",
]
