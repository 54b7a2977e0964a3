"""Card rendering contract and helpers shared by the platform renderers.

Platform renderers turn a :class:`~.elements.Card` into a
:class:`RenderedCard` (rich blocks/embeds plus interactive component
groups) and into flat fallback text for notification previews and screen
readers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..emoji import convert_emoji_placeholders
from .elements import ActionsElement, Card, CardChild, SelectOption

logger = logging.getLogger(__name__)

FALLBACK_DIVIDER = "---"

# Neutral button style -> platform vocabulary.  Missing keys mean "use the
# platform default" (no explicit style).
BUTTON_STYLE_MAPPINGS: dict[str, dict[str, Any]] = {
    "slack": {"primary": "primary", "danger": "danger"},
    "discord": {"primary": 1, "danger": 4},
}


@dataclass(frozen=True)
class RenderedCard:
    """Platform payload parts for a card.

    *rich_content* holds the primary container(s): Slack blocks or Discord
    embeds.  *components* holds one entry per interactive group.
    """

    rich_content: list[dict[str, Any]] = field(default_factory=list)
    components: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class FallbackPolicy:
    """How a card degrades to flat text on one target."""

    bold_marker: str = "*"
    separator: str = "\n"
    include_actions: bool = False
    bold_field_labels: bool = False
    divider: str = FALLBACK_DIVIDER


@dataclass(frozen=True)
class CardRenderer:
    platform: str
    render: Callable[[Card], RenderedCard]
    render_fallback: Callable[..., str]
    to_payload: Callable[[Card], dict[str, Any]]


def map_button_style(style: str | None, platform: str) -> Any:
    """Map a neutral button style; ``None`` means the platform default."""
    if not style:
        return None
    return BUTTON_STYLE_MAPPINGS[platform].get(style)


def flatten_children(children: tuple[CardChild, ...]) -> Iterator[CardChild]:
    """Yield card children with sections expanded in place, preserving order."""
    for child in children:
        if child.type == "section":
            yield from flatten_children(child.children)
        else:
            yield child


def cap_options(options: tuple[SelectOption, ...], cap: int, element_id: str) -> tuple[SelectOption, ...]:
    if len(options) <= cap:
        return options
    logger.debug(
        "Element %s has %d options; keeping the first %d",
        element_id, len(options), cap,
    )
    return options[:cap]


def clamp(text: str, cap: int) -> str:
    """Shorten *text* to *cap* characters with a trailing ellipsis."""
    if len(text) <= cap:
        return text
    return text[: cap - 3] + "..."


# -- fallback text -----------------------------------------------------------


def card_to_fallback_text(card: Card, policy: FallbackPolicy, platform: str) -> str:
    def convert(value: str) -> str:
        return convert_emoji_placeholders(value, platform)

    parts: list[str] = []
    if card.title:
        parts.append(f"{policy.bold_marker}{convert(card.title)}{policy.bold_marker}")
    if card.subtitle:
        parts.append(convert(card.subtitle))
    for child in card.children:
        rendered = _child_fallback(child, policy, convert)
        if rendered:
            parts.append(rendered)
    return policy.separator.join(parts)


def _child_fallback(child: CardChild, policy: FallbackPolicy, convert: Callable[[str], str]) -> str | None:
    kind = child.type
    if kind == "text":
        return convert(child.content)
    if kind == "link":
        return f"{convert(child.label)} ({child.url})"
    if kind == "fields":
        marker = policy.bold_marker if policy.bold_field_labels else ""
        return "\n".join(
            f"{marker}{convert(f.label)}{marker}: {convert(f.value)}" for f in child.children
        )
    if kind == "actions":
        return _actions_fallback(child, convert) if policy.include_actions else None
    if kind == "section":
        nested = (_child_fallback(c, policy, convert) for c in child.children)
        return "\n".join(n for n in nested if n) or None
    if kind == "divider":
        return policy.divider
    if kind == "image":
        return None
    raise TypeError(f"Unsupported card child: {kind!r}")


def _actions_fallback(actions: ActionsElement, convert: Callable[[str], str]) -> str | None:
    labels = [convert(c.label) for c in actions.children]
    if not labels:
        return None
    return "[" + "] [".join(labels) + "]"
