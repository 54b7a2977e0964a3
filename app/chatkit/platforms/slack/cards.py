"""Slack Block Kit rendering for cards.

Block Kit limits enforced here (longer input is clamped, never rejected):
header text 150 chars, button text 75, option text 75, 10 fields per
section, 100 options per static select, 10 radio buttons.
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
    FieldsElement,
    LinkButtonElement,
    RadioSelectElement,
    SelectElement,
    SelectOption,
    TextElement,
)
from ...messaging.formatting import truncate_content

logger = logging.getLogger(__name__)

PLATFORM = "slack"
MAX_TEXT_LENGTH = 40000
HEADER_MAX_LENGTH = 150
BUTTON_TEXT_MAX_LENGTH = 75
OPTION_TEXT_MAX_LENGTH = 75
SECTION_FIELDS_MAX = 10
STATIC_SELECT_OPTIONS_MAX = 100
RADIO_OPTIONS_MAX = 10

Block = dict[str, Any]


def _emoji(text: str) -> str:
    return convert_emoji_placeholders(text, PLATFORM)


def _plain(text: str, *, emoji: bool = False) -> dict[str, Any]:
    obj: dict[str, Any] = {"type": "plain_text", "text": text}
    if emoji:
        obj["emoji"] = True
    return obj


def _mrkdwn(text: str) -> dict[str, str]:
    return {"type": "mrkdwn", "text": text}


# -- blocks --------------------------------------------------------------------


def render(card: Card) -> RenderedCard:
    """Convert *card* into Block Kit blocks.

    ``actions`` blocks stay in position inside the block list and are also
    listed, in order, as the card's interactive components.
    """
    blocks: list[Block] = []

    if card.title:
        blocks.append({
            "type": "header",
            "text": _plain(clamp(_emoji(card.title), HEADER_MAX_LENGTH), emoji=True),
        })
    if card.subtitle:
        blocks.append({"type": "context", "elements": [_mrkdwn(_emoji(card.subtitle))]})
    if card.image_url:
        blocks.append({
            "type": "image",
            "image_url": card.image_url,
            "alt_text": card.title or "Card image",
        })

    for child in flatten_children(card.children):
        blocks.extend(child_to_blocks(child))

    components = [b for b in blocks if b["type"] == "actions"]
    return RenderedCard(rich_content=blocks, components=components)


def child_to_blocks(child: CardChild) -> list[Block]:
    kind = child.type
    if kind == "text":
        return [text_to_block(child)]
    if kind == "image":
        return [{"type": "image", "image_url": child.url, "alt_text": child.alt or "Image"}]
    if kind == "divider":
        return [{"type": "divider"}]
    if kind == "actions":
        return [actions_to_block(child)]
    if kind == "fields":
        return fields_to_blocks(child)
    if kind == "link":
        return [{"type": "section", "text": _mrkdwn(f"<{child.url}|{_emoji(child.label)}>")}]
    if kind == "section":
        return [b for c in flatten_children(child.children) for b in child_to_blocks(c)]
    raise TypeError(f"Unsupported card child: {kind!r}")


def text_to_block(element: TextElement) -> Block:
    text = _emoji(element.content)
    if element.style == "muted":
        # No muted style in Block Kit; a context block is the closest match.
        return {"type": "context", "elements": [_mrkdwn(text)]}
    if element.style == "bold":
        text = f"*{text}*"
    return {"type": "section", "text": _mrkdwn(text)}


def fields_to_blocks(element: FieldsElement) -> list[Block]:
    fields = [
        _mrkdwn(f"*{_emoji(f.label)}*\n{_emoji(f.value)}")
        for f in element.children
    ]
    if len(fields) > SECTION_FIELDS_MAX:
        logger.debug("Splitting %d fields across sections of %d", len(fields), SECTION_FIELDS_MAX)
    return [
        {"type": "section", "fields": fields[i:i + SECTION_FIELDS_MAX]}
        for i in range(0, len(fields), SECTION_FIELDS_MAX)
    ] or [{"type": "section", "fields": []}]


def actions_to_block(element: ActionsElement) -> Block:
    elements: list[dict[str, Any]] = []
    for child in element.children:
        if child.type == "button":
            elements.append(button_to_element(child))
        elif child.type == "link-button":
            elements.append(link_button_to_element(child))
        elif child.type == "select":
            elements.append(select_to_element(child))
        else:
            elements.append(radio_select_to_element(child))
    return {"type": "actions", "elements": elements}


def button_to_element(button: ButtonElement) -> dict[str, Any]:
    element: dict[str, Any] = {
        "type": "button",
        "text": _plain(clamp(_emoji(button.label), BUTTON_TEXT_MAX_LENGTH), emoji=True),
        "action_id": button.id,
    }
    if button.value:
        element["value"] = button.value
    style = map_button_style(button.style, PLATFORM)
    if style:
        element["style"] = style
    return element


def link_button_to_element(button: LinkButtonElement) -> dict[str, Any]:
    element: dict[str, Any] = {
        "type": "button",
        "text": _plain(clamp(_emoji(button.label), BUTTON_TEXT_MAX_LENGTH), emoji=True),
        "action_id": f"link-{button.url[:200]}",
        "url": button.url,
    }
    style = map_button_style(button.style, PLATFORM)
    if style:
        element["style"] = style
    return element


def option_to_object(option: SelectOption) -> dict[str, Any]:
    obj: dict[str, Any] = {
        "text": _plain(clamp(_emoji(option.label), OPTION_TEXT_MAX_LENGTH)),
        "value": option.value,
    }
    if option.description:
        obj["description"] = _plain(clamp(option.description, OPTION_TEXT_MAX_LENGTH))
    return obj


def _with_initial(element: dict[str, Any], options: list[dict[str, Any]], initial: str | None) -> dict[str, Any]:
    if initial:
        match = next((o for o in options if o["value"] == initial), None)
        if match is not None:
            element["initial_option"] = match
    return element


def select_to_element(select: SelectElement) -> dict[str, Any]:
    options = [option_to_object(o) for o in cap_options(select.options, STATIC_SELECT_OPTIONS_MAX, select.id)]
    element: dict[str, Any] = {
        "type": "static_select",
        "action_id": select.id,
        "placeholder": _plain(_emoji(select.placeholder or select.label)),
        "options": options,
    }
    return _with_initial(element, options, select.initial_option)


def radio_select_to_element(radio: RadioSelectElement) -> dict[str, Any]:
    options = [option_to_object(o) for o in cap_options(radio.options, RADIO_OPTIONS_MAX, radio.id)]
    element: dict[str, Any] = {
        "type": "radio_buttons",
        "action_id": radio.id,
        "options": options,
    }
    return _with_initial(element, options, radio.initial_option)


# -- fallback & payload --------------------------------------------------------


def fallback_policy() -> FallbackPolicy:
    return FallbackPolicy(
        bold_marker="*",
        separator="\n",
        include_actions=settings.cfg.slack.fallback_include_actions,
    )


def render_fallback(card: Card, policy: FallbackPolicy | None = None) -> str:
    """Flat mrkdwn text for notifications; actions are omitted by default."""
    return card_to_fallback_text(card, policy or fallback_policy(), PLATFORM)


def to_payload(card: Card) -> dict[str, Any]:
    """``chat.postMessage`` body for *card*: fallback ``text`` plus ``blocks``."""
    return {
        "text": truncate_content(render_fallback(card), MAX_TEXT_LENGTH),
        "blocks": render(card).rich_content,
    }


RENDERER = CardRenderer(
    platform=PLATFORM,
    render=render,
    render_fallback=render_fallback,
    to_payload=to_payload,
)
