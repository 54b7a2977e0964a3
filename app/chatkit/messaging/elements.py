"""Declarative, platform-agnostic card and modal elements.

Elements are frozen pydantic models.  Field names are snake_case in Python
and accept camelCase aliases, so cards authored as JSON (``imageUrl``,
``callbackId``) validate directly::

    card = Card.model_validate({
        "title": "Order #1234",
        "children": [
            {"type": "text", "content": "Shipped!"},
            {"type": "actions", "children": [{"type": "button", "id": "track", "label": "Track"}]},
        ],
    })
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

ButtonStyle = Literal["primary", "danger", "default"]
TextStyle = Literal["plain", "bold", "muted"]


class _Element(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


# -- interactive elements --------------------------------------------------


class SelectOption(_Element):
    label: str
    value: str
    description: str | None = None


class ButtonElement(_Element):
    type: Literal["button"] = "button"
    id: str
    label: str
    style: ButtonStyle | None = None
    value: str | None = None


class LinkButtonElement(_Element):
    type: Literal["link-button"] = "link-button"
    url: str
    label: str
    style: ButtonStyle | None = None


class SelectElement(_Element):
    type: Literal["select"] = "select"
    id: str
    label: str
    options: tuple[SelectOption, ...] = ()
    placeholder: str | None = None
    initial_option: str | None = None
    optional: bool = False


class RadioSelectElement(_Element):
    type: Literal["radio_select"] = "radio_select"
    id: str
    label: str
    options: tuple[SelectOption, ...] = ()
    initial_option: str | None = None
    optional: bool = False


ActionChild = Annotated[
    Union[ButtonElement, LinkButtonElement, SelectElement, RadioSelectElement],
    Field(discriminator="type"),
]


# -- card children -----------------------------------------------------------


class TextElement(_Element):
    type: Literal["text"] = "text"
    content: str
    style: TextStyle = "plain"


class ImageElement(_Element):
    type: Literal["image"] = "image"
    url: str
    alt: str | None = None


class DividerElement(_Element):
    type: Literal["divider"] = "divider"


class ActionsElement(_Element):
    type: Literal["actions"] = "actions"
    children: tuple[ActionChild, ...] = ()


class FieldElement(_Element):
    type: Literal["field"] = "field"
    label: str
    value: str


class FieldsElement(_Element):
    type: Literal["fields"] = "fields"
    children: tuple[FieldElement, ...] = ()


class LinkElement(_Element):
    type: Literal["link"] = "link"
    url: str
    label: str


class SectionElement(_Element):
    type: Literal["section"] = "section"
    children: tuple[CardChild, ...] = ()


CardChild = Annotated[
    Union[
        TextElement,
        ImageElement,
        DividerElement,
        ActionsElement,
        SectionElement,
        FieldsElement,
        LinkElement,
    ],
    Field(discriminator="type"),
]

SectionElement.model_rebuild()


class Card(_Element):
    type: Literal["card"] = "card"
    title: str | None = None
    subtitle: str | None = None
    image_url: str | None = None
    children: tuple[CardChild, ...] = ()


# -- modal -------------------------------------------------------------------


class TextInputElement(_Element):
    type: Literal["text_input"] = "text_input"
    id: str
    label: str
    placeholder: str | None = None
    initial_value: str | None = None
    multiline: bool = False
    optional: bool = False
    max_length: int | None = None


ModalChild = Annotated[
    Union[TextInputElement, SelectElement, TextElement, FieldsElement],
    Field(discriminator="type"),
]

VALID_MODAL_CHILD_TYPES: frozenset[str] = frozenset({"text_input", "select", "text", "fields"})


class Modal(_Element):
    type: Literal["modal"] = "modal"
    callback_id: str
    title: str
    submit_label: str | None = None
    close_label: str | None = None
    notify_on_close: bool = False
    private_metadata: str | None = None
    children: tuple[ModalChild, ...] = ()

    @field_validator("children", mode="before")
    @classmethod
    def _drop_unsupported_children(cls, value: Any) -> Any:
        if not isinstance(value, list | tuple):
            return value
        kept = [c for c in value if _child_type(c) in VALID_MODAL_CHILD_TYPES]
        if len(kept) < len(value):
            logger.warning(
                "Modal contains %d unsupported child element(s); ignoring them",
                len(value) - len(kept),
            )
        return kept


def _child_type(child: Any) -> str | None:
    if isinstance(child, dict):
        return child.get("type")
    return getattr(child, "type", None)


def is_card(value: Any) -> bool:
    return isinstance(value, Card)


def is_modal(value: Any) -> bool:
    return isinstance(value, Modal)
