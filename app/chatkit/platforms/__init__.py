"""Platform registry -- codecs and card renderers keyed by platform tag.

Tables are built at import time and only read afterwards::

    get_codec("slack").from_markdown("**hi** @alice")   # '*hi* <@alice>'
    get_card_renderer("discord").to_payload(card)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ..messaging.cards import CardRenderer
from ..messaging.formatting import FormatCodec, truncate_content
from ..messaging.postable import PostableMessage
from . import discord, slack
from .slack import modals as slack_modals

PLATFORMS: tuple[str, ...] = ("slack", "discord")

_CODECS: dict[str, FormatCodec] = {
    "slack": slack.CODEC,
    "discord": discord.CODEC,
}

_CARD_RENDERERS: dict[str, CardRenderer] = {
    "slack": slack.RENDERER,
    "discord": discord.RENDERER,
}

# Discord has no form dialog equivalent.
_MODAL_RENDERERS: dict[str, Callable[..., dict[str, Any]]] = {
    "slack": slack_modals.render,
}


def _lookup(table: dict[str, Any], platform: str, what: str) -> Any:
    try:
        return table[platform]
    except KeyError:
        raise ValueError(
            f"No {what} for platform {platform!r}; expected one of {sorted(table)}"
        ) from None


def get_codec(platform: str) -> FormatCodec:
    return _lookup(_CODECS, platform, "text codec")


def get_card_renderer(platform: str) -> CardRenderer:
    return _lookup(_CARD_RENDERERS, platform, "card renderer")


def get_modal_renderer(platform: str) -> Callable[..., dict[str, Any]]:
    return _lookup(_MODAL_RENDERERS, platform, "modal renderer")


def render_postable(message: PostableMessage, platform: str) -> str:
    """Render *message* as *platform* text, truncated to the platform cap."""
    codec = get_codec(platform)
    return truncate_content(codec.render_postable(message), codec.max_content_length)


def convert(text: str, source: str, target: str) -> str:
    """Translate platform text from *source* dialect to *target* dialect."""
    return get_codec(target).from_tree(get_codec(source).to_tree(text))


__all__ = [
    "PLATFORMS",
    "convert",
    "get_card_renderer",
    "get_codec",
    "get_modal_renderer",
    "render_postable",
]
