"""Discord embed + message-component rendering for cards.

A card becomes one embed (title, description built from the flattened body,
header image, accent color, inline fields) plus action rows.  Discord
limits are clamped: 2000 chars of message content, embed title 256,
description 4096, 25 fields (name 256 / value 1024), 5 action rows of at
most 5 buttons, button labels 80, 25 select options.
"""

from __future__ import annotations

import logging
from typing import Any

from ...config import settings
from ...emoji import convert_emoji_placeholders
from ...messaging.cards import (
    CardRenderer,
    FallbackPolicy,
    RenderedCard,
    cap_options,
    card_to_fallback_text,
    clamp,
    flatten_children,
    map_button_style,
)
from ...messaging.elements import (
    ActionsElement,
    ButtonElement,
    Card,
    CardChild,
    LinkButtonElement,
    RadioSelectElement,
    SelectElement,
    TextElement,
)
from ...messaging.formatting import truncate_content

logger = logging.getLogger(__name__)

PLATFORM = "discord"
MAX_CONTENT_LENGTH = 2000
EMBED_TITLE_MAX = 256
EMBED_DESCRIPTION_MAX = 4096
EMBED_FIELDS_MAX = 25
FIELD_NAME_MAX = 256
FIELD_VALUE_MAX = 1024
BUTTONS_PER_ROW = 5
ACTION_ROWS_MAX = 5
BUTTON_LABEL_MAX = 80
SELECT_OPTIONS_MAX = 25
RADIO_OPTIONS_MAX = 10
DIVIDER = "───────────"

# discord-api-types v10 enums
ACTION_ROW = 1
BUTTON = 2
STRING_SELECT = 3
BUTTON_STYLE_SECONDARY = 2
BUTTON_STYLE_LINK = 5


def _emoji(text: str) -> str:
    return convert_emoji_placeholders(text, PLATFORM)


def render(card: Card, *, accent_color: int | None = None) -> RenderedCard:
    """Convert *card* into one embed plus its action rows."""
    embed: dict[str, Any] = {}
    fields: list[dict[str, Any]] = []
    text_parts: list[str] = []
    components: list[dict[str, Any]] = []

    if card.title:
        embed["title"] = clamp(_emoji(card.title), EMBED_TITLE_MAX)
    if card.subtitle:
        text_parts.append(_emoji(card.subtitle))
    if card.image_url:
        embed["image"] = {"url": card.image_url}
    embed["color"] = accent_color if accent_color is not None else settings.cfg.discord.accent_color

    for child in flatten_children(card.children):
        _process_child(child, text_parts, fields, components)

    if text_parts:
        embed["description"] = clamp("\n\n".join(text_parts), EMBED_DESCRIPTION_MAX)
    if fields:
        if len(fields) > EMBED_FIELDS_MAX:
            logger.debug("Dropping %d embed fields over the limit", len(fields) - EMBED_FIELDS_MAX)
        embed["fields"] = fields[:EMBED_FIELDS_MAX]

    if len(components) > ACTION_ROWS_MAX:
        logger.debug("Dropping %d action rows over the limit", len(components) - ACTION_ROWS_MAX)
    return RenderedCard(rich_content=[embed], components=components[:ACTION_ROWS_MAX])


def _process_child(
    child: CardChild,
    text_parts: list[str],
    fields: list[dict[str, Any]],
    components: list[dict[str, Any]],
) -> None:
    kind = child.type
    if kind == "text":
        text_parts.append(text_to_markdown(child))
    elif kind == "divider":
        text_parts.append(DIVIDER)
    elif kind == "link":
        text_parts.append(f"[{_emoji(child.label)}]({child.url})")
    elif kind == "fields":
        fields.extend(
            {
                "name": clamp(_emoji(f.label), FIELD_NAME_MAX),
                "value": clamp(_emoji(f.value), FIELD_VALUE_MAX),
                "inline": True,
            }
            for f in child.children
        )
    elif kind == "actions":
        components.extend(actions_to_rows(child))
    elif kind == "image":
        # An embed carries a single image, taken from the card header.
        logger.debug("Ignoring body image %s; embeds hold one image", child.url)
    elif kind == "section":
        for nested in flatten_children(child.children):
            _process_child(nested, text_parts, fields, components)
    else:
        raise TypeError(f"Unsupported card child: {kind!r}")


def text_to_markdown(element: TextElement) -> str:
    text = _emoji(element.content)
    if element.style == "bold":
        return f"**{text}**"
    if element.style == "muted":
        # Subtext lines are Discord's secondary, de-emphasised presentation.
        return "\n".join(f"-# {line}" for line in text.split("\n"))
    return text


def actions_to_rows(element: ActionsElement) -> list[dict[str, Any]]:
    """Buttons fill rows of five in order; each select gets its own row after them."""
    buttons: list[dict[str, Any]] = []
    select_rows: list[dict[str, Any]] = []
    for child in element.children:
        if child.type == "button":
            buttons.append(button_to_component(child))
        elif child.type == "link-button":
            buttons.append(link_button_to_component(child))
        elif child.type == "select":
            select_rows.append(_row([select_to_component(child)]))
        else:
            select_rows.append(_row([radio_select_to_component(child)]))

    rows = [_row(buttons[i:i + BUTTONS_PER_ROW]) for i in range(0, len(buttons), BUTTONS_PER_ROW)]
    return rows + select_rows


def _row(components: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": ACTION_ROW, "components": components}


def button_to_component(button: ButtonElement) -> dict[str, Any]:
    return {
        "type": BUTTON,
        "style": map_button_style(button.style, PLATFORM) or BUTTON_STYLE_SECONDARY,
        "label": clamp(_emoji(button.label), BUTTON_LABEL_MAX),
        "custom_id": button.id,
    }


def link_button_to_component(button: LinkButtonElement) -> dict[str, Any]:
    return {
        "type": BUTTON,
        "style": BUTTON_STYLE_LINK,
        "label": clamp(_emoji(button.label), BUTTON_LABEL_MAX),
        "url": button.url,
    }


def _string_select(element_id: str, placeholder: str, options: list[dict[str, Any]], initial: str | None) -> dict[str, Any]:
    for option in options:
        if initial and option["value"] == initial:
            option["default"] = True
    return {
        "type": STRING_SELECT,
        "custom_id": element_id,
        "placeholder": placeholder,
        "options": options,
        "min_values": 1,
        "max_values": 1,
    }


def _option(label: str, value: str, description: str | None) -> dict[str, Any]:
    option: dict[str, Any] = {"label": clamp(_emoji(label), 100), "value": value}
    if description:
        option["description"] = clamp(description, 100)
    return option


def select_to_component(select: SelectElement) -> dict[str, Any]:
    options = [
        _option(o.label, o.value, o.description)
        for o in cap_options(select.options, SELECT_OPTIONS_MAX, select.id)
    ]
    return _string_select(select.id, _emoji(select.placeholder or select.label), options, select.initial_option)


def radio_select_to_component(radio: RadioSelectElement) -> dict[str, Any]:
    # No radio control on Discord; a single-choice select stands in.
    options = [
        _option(o.label, o.value, o.description)
        for o in cap_options(radio.options, RADIO_OPTIONS_MAX, radio.id)
    ]
    return _string_select(radio.id, _emoji(radio.label), options, radio.initial_option)


# -- fallback & payload --------------------------------------------------------


def fallback_policy() -> FallbackPolicy:
    return FallbackPolicy(
        bold_marker="**",
        separator="\n\n",
        include_actions=settings.cfg.discord.fallback_include_actions,
        bold_field_labels=True,
    )


def render_fallback(card: Card, policy: FallbackPolicy | None = None) -> str:
    """Flat markdown text; button labels are listed as ``[Label]`` by default."""
    return card_to_fallback_text(card, policy or fallback_policy(), PLATFORM)


def to_payload(card: Card) -> dict[str, Any]:
    """Message create body: fallback ``content``, ``embeds`` and ``components``."""
    rendered = render(card)
    return {
        "content": truncate_content(render_fallback(card), MAX_CONTENT_LENGTH),
        "embeds": rendered.rich_content,
        "components": rendered.components,
    }


RENDERER = CardRenderer(
    platform=PLATFORM,
    render=render,
    render_fallback=render_fallback,
    to_payload=to_payload,
)
