"""Tests for card and modal element models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.chatkit.messaging.elements import (
    ButtonElement,
    Card,
    Modal,
    SectionElement,
    TextElement,
    is_card,
    is_modal,
)


class TestCardModel:
    def test_camel_case_aliases(self) -> None:
        card = Card.model_validate({"title": "T", "imageUrl": "https://example.com/a.png"})
        assert card.image_url == "https://example.com/a.png"

    def test_snake_case_names(self) -> None:
        assert Card(image_url="https://example.com/a.png").image_url == "https://example.com/a.png"

    def test_children_discriminated(self) -> None:
        card = Card.model_validate({"children": [
            {"type": "text", "content": "hi"},
            {"type": "actions", "children": [{"type": "button", "id": "b", "label": "B"}]},
            {"type": "section", "children": [{"type": "divider"}]},
        ]})
        text, actions, section = card.children
        assert isinstance(text, TextElement)
        assert isinstance(actions.children[0], ButtonElement)
        assert isinstance(section, SectionElement)

    def test_unknown_child_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Card.model_validate({"children": [{"type": "video", "url": "x"}]})

    def test_bad_text_style_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TextElement(content="x", style="shouty")  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        card = Card(title="T")
        with pytest.raises(ValidationError):
            card.title = "U"  # type: ignore[misc]

    def test_type_guards(self) -> None:
        assert is_card(Card())
        assert not is_card({"type": "card"})
        assert is_modal(Modal(callback_id="c", title="T"))


class TestModalModel:
    def test_requires_callback_id(self) -> None:
        with pytest.raises(ValidationError):
            Modal.model_validate({"title": "T"})

    def test_select_child_accepted(self) -> None:
        modal = Modal.model_validate({
            "callbackId": "c",
            "title": "T",
            "notifyOnClose": True,
            "children": [{"type": "select", "id": "s", "label": "S", "options": [{"label": "A", "value": "a"}]}],
        })
        assert modal.notify_on_close is True
        assert modal.children[0].options[0].value == "a"
