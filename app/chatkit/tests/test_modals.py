"""Tests for Slack modal rendering and private metadata encoding."""

from __future__ import annotations

import json
import logging

import pytest

from app.chatkit.messaging.elements import Modal
from app.chatkit.platforms.slack.interactions import parse_view_submission
from app.chatkit.platforms.slack.modals import (
    ModalMetadata,
    ModalResponse,
    decode_modal_metadata,
    encode_modal_metadata,
    modal_response_to_slack,
    render,
)
from app.chatkit.util.singletons import reset_all_singletons


@pytest.fixture()
def feedback_modal() -> Modal:
    return Modal.model_validate({
        "callbackId": "feedback",
        "title": "Send us your feedback today",
        "privateMetadata": '{"k":1}',
        "children": [
            {"type": "text", "content": "Tell us more"},
            {"type": "text_input", "id": "message", "label": "Message", "multiline": True, "maxLength": 500},
            {
                "type": "select",
                "id": "rating",
                "label": "Rating",
                "initialOption": "nope",
                "options": [{"label": "Good", "value": "good"}, {"label": "Bad", "value": "bad"}],
            },
        ],
    })


class TestModalRender:
    def test_view_shell(self, feedback_modal: Modal) -> None:
        view = render(feedback_modal)
        assert view["type"] == "modal"
        assert view["callback_id"] == "feedback"
        assert view["title"] == {"type": "plain_text", "text": "Send us your feedback to"}
        assert view["submit"]["text"] == "Submit"
        assert view["close"]["text"] == "Cancel"
        assert view["notify_on_close"] is False

    def test_custom_labels_clamped(self) -> None:
        modal = Modal(callback_id="c", title="T", submit_label="Send it now please, right now", close_label="Nah")
        view = render(modal)
        assert len(view["submit"]["text"]) == 24
        assert view["close"]["text"] == "Nah"

    def test_blocks(self, feedback_modal: Modal) -> None:
        text, message, rating = render(feedback_modal)["blocks"]
        assert text["type"] == "section"
        assert message["type"] == "input"
        assert message["element"] == {
            "type": "plain_text_input",
            "action_id": "message",
            "multiline": True,
            "max_length": 500,
        }
        assert rating["element"]["type"] == "static_select"
        assert "initial_option" not in rating["element"]

    def test_metadata_roundtrip(self, feedback_modal: Modal) -> None:
        view = render(feedback_modal, context_id="ctx-1", message_id="1700000000.0001")
        meta = decode_modal_metadata(view["private_metadata"])
        assert meta == ModalMetadata("ctx-1", "1700000000.0001", '{"k":1}')

    def test_no_metadata_key_when_empty(self) -> None:
        assert "private_metadata" not in render(Modal(callback_id="c", title="T"))

    def test_unsupported_children_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            modal = Modal.model_validate({
                "callbackId": "c",
                "title": "T",
                "children": [{"type": "divider"}, {"type": "text_input", "id": "n", "label": "Name"}],
            })
        assert [c.type for c in modal.children] == ["text_input"]
        assert "unsupported" in caplog.text


class TestModalMetadata:
    def test_compact_json(self) -> None:
        encoded = encode_modal_metadata(ModalMetadata("ctx", "t1", "m1"))
        assert encoded == '{"c":"ctx","t":"t1","m":"m1"}'

    def test_absent_keys_omitted(self) -> None:
        assert json.loads(encode_modal_metadata(ModalMetadata(context_id="ctx"))) == {"c": "ctx"}

    def test_all_empty_is_none(self) -> None:
        assert encode_modal_metadata(ModalMetadata()) is None

    def test_legacy_plain_string(self) -> None:
        assert decode_modal_metadata("C123:1700000000.0001") == ModalMetadata(context_id="C123:1700000000.0001")

    def test_json_without_keys_is_legacy(self) -> None:
        assert decode_modal_metadata('{"x":1}') == ModalMetadata(context_id='{"x":1}')

    def test_empty_decodes_to_nothing(self) -> None:
        assert decode_modal_metadata(None) == ModalMetadata()
        assert decode_modal_metadata("") == ModalMetadata()

    def test_oversized_caller_metadata_truncated(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            encoded = encode_modal_metadata(ModalMetadata("ctx", "t1", "a" * 5000))
        assert len(encoded.encode("utf-8")) <= 3000
        meta = decode_modal_metadata(encoded)
        assert meta.context_id == "ctx"
        assert meta.private_metadata and set(meta.private_metadata) == {"a"}
        assert "truncated" in caplog.text

    def test_truncation_respects_multibyte_characters(self) -> None:
        original = "é" * 3000
        encoded = encode_modal_metadata(ModalMetadata(private_metadata=original))
        assert len(encoded.encode("utf-8")) <= 3000
        assert original.startswith(decode_modal_metadata(encoded).private_metadata)

    def test_oversized_ids_logged_as_error(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            encoded = encode_modal_metadata(ModalMetadata("x" * 4000, None, "extra"))
        assert decode_modal_metadata(encoded) == ModalMetadata(context_id="x" * 4000)
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "reject" in errors[0].getMessage()

    def test_cap_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHATKIT_MODAL_METADATA_MAX_BYTES", "100")
        reset_all_singletons()
        encoded = encode_modal_metadata(ModalMetadata("ctx", None, "z" * 500))
        assert len(encoded.encode("utf-8")) <= 100


class TestModalResponse:
    def test_close(self) -> None:
        assert modal_response_to_slack(ModalResponse("close")) == {}

    def test_errors(self) -> None:
        response = ModalResponse("errors", errors={"message": "Required"})
        assert modal_response_to_slack(response) == {
            "response_action": "errors",
            "errors": {"message": "Required"},
        }

    def test_update_reencodes_context(self, feedback_modal: Modal) -> None:
        result = modal_response_to_slack(ModalResponse("update", modal=feedback_modal), "ctx-9")
        assert result["response_action"] == "update"
        assert decode_modal_metadata(result["view"]["private_metadata"]).context_id == "ctx-9"

    def test_update_keeps_originating_message(self, feedback_modal: Modal) -> None:
        view = render(feedback_modal, context_id="ctx", message_id="1700.1")
        event = parse_view_submission({
            "user": {"id": "U1"},
            "view": {"id": "V1", "callback_id": "feedback", "private_metadata": view["private_metadata"]},
        })
        result = modal_response_to_slack(
            ModalResponse("update", modal=feedback_modal), event.context_id, event.message_id,
        )
        meta = decode_modal_metadata(result["view"]["private_metadata"])
        assert meta == ModalMetadata("ctx", "1700.1", '{"k":1}')

    def test_push_requires_modal(self) -> None:
        with pytest.raises(ValueError):
            modal_response_to_slack(ModalResponse("push"))


class TestMetadataRoundtrip:
    def test_correlation_and_caller_metadata(self) -> None:
        encoded = encode_modal_metadata(ModalMetadata(context_id="t1", private_metadata='{"k":1}'))
        assert decode_modal_metadata(encoded) == ModalMetadata(context_id="t1", private_metadata='{"k":1}')

    def test_bare_string_is_correlation_id(self) -> None:
        meta = decode_modal_metadata("t1")
        assert meta.context_id == "t1"
        assert meta.private_metadata is None
