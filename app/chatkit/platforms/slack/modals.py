"""Slack modal (view) rendering and ``private_metadata`` encoding.

Slack gives a view a single opaque ``private_metadata`` string of at most
3000 bytes.  We pack three values into it as compact JSON::

    {"c": <context id>, "t": <originating message id>, "m": <caller metadata>}

Caller metadata that would push the encoding over the cap is truncated and
the truncation logged.  Strings that are not in this format decode as a bare
context id, which is how views opened by older releases stored it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Literal

from ...config import settings
from ...messaging.elements import Modal, ModalChild, SelectElement, TextInputElement
from .cards import fields_to_blocks, option_to_object, text_to_block

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 24
BUTTON_LABEL_MAX_LENGTH = 24
STATIC_SELECT_OPTIONS_MAX = 100


# -- private metadata ------------------------------------------------------


@dataclass(frozen=True)
class ModalMetadata:
    context_id: str | None = None
    message_id: str | None = None
    private_metadata: str | None = None


def _dump(payload: dict[str, str]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def encode_modal_metadata(meta: ModalMetadata, *, max_bytes: int | None = None) -> str | None:
    """Pack *meta* into one ``private_metadata`` string (``None`` if empty).

    Only the caller metadata is ever shortened.  Correlation ids that by
    themselves exceed the cap are a caller error: they are kept whole, an
    error is logged, and Slack will refuse the view.
    """
    cap = max_bytes or settings.cfg.modal.metadata_max_bytes
    payload = {
        key: value
        for key, value in (("c", meta.context_id), ("t", meta.message_id), ("m", meta.private_metadata))
        if value
    }
    if not payload:
        return None

    encoded = _dump(payload)
    if len(encoded.encode("utf-8")) <= cap:
        return encoded

    caller = payload.pop("m", "")
    ids_only = _dump(payload)
    if len(ids_only.encode("utf-8")) > cap:
        logger.error(
            "Modal correlation ids take %d bytes, over the %d byte metadata cap; Slack will reject this view",
            len(ids_only.encode("utf-8")), cap,
        )
        return ids_only
    if len(_dump({**payload, "m": ""}).encode("utf-8")) > cap:
        logger.warning("No room left for caller metadata under the %d byte cap; dropping it", cap)
        return ids_only

    kept = _fit(caller, payload, cap)
    logger.warning(
        "Modal private metadata truncated from %d to %d chars to fit the %d byte cap",
        len(caller), len(kept), cap,
    )
    return _dump({**payload, "m": kept})


def _fit(caller: str, payload: dict[str, str], cap: int) -> str:
    """Longest prefix of *caller* whose encoding fits in *cap* bytes."""
    lo, hi = 0, len(caller)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if len(_dump({**payload, "m": caller[:mid]}).encode("utf-8")) <= cap:
            lo = mid
        else:
            hi = mid - 1
    return caller[:lo]


def decode_modal_metadata(raw: str | None) -> ModalMetadata:
    """Unpack ``private_metadata``; unrecognised strings become the context id."""
    if not raw:
        return ModalMetadata()
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict) and any(k in parsed for k in ("c", "t", "m")):
        return ModalMetadata(
            context_id=_str_or_none(parsed.get("c")),
            message_id=_str_or_none(parsed.get("t")),
            private_metadata=_str_or_none(parsed.get("m")),
        )
    return ModalMetadata(context_id=raw)


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else json.dumps(value)


# -- view ------------------------------------------------------------------


def _plain(text: str) -> dict[str, str]:
    return {"type": "plain_text", "text": text}


def _label(text: str | None, default: str) -> dict[str, str]:
    return _plain((text or default)[:BUTTON_LABEL_MAX_LENGTH])


def render(
    modal: Modal,
    context_id: str | None = None,
    message_id: str | None = None,
) -> dict[str, Any]:
    """Convert *modal* to a Slack view, packing correlation ids into its metadata."""
    view: dict[str, Any] = {
        "type": "modal",
        "callback_id": modal.callback_id,
        "title": _plain(modal.title[:TITLE_MAX_LENGTH]),
        "submit": _label(modal.submit_label, "Submit"),
        "close": _label(modal.close_label, "Cancel"),
        "notify_on_close": modal.notify_on_close,
        "blocks": [block for child in modal.children for block in child_to_blocks(child)],
    }
    metadata = encode_modal_metadata(ModalMetadata(context_id, message_id, modal.private_metadata))
    if metadata is not None:
        view["private_metadata"] = metadata
    return view


def child_to_blocks(child: ModalChild) -> list[dict[str, Any]]:
    kind = child.type
    if kind == "text_input":
        return [text_input_to_block(child)]
    if kind == "select":
        return [select_to_block(child)]
    if kind == "text":
        return [text_to_block(child)]
    if kind == "fields":
        return fields_to_blocks(child)
    raise TypeError(f"Unsupported modal child: {kind!r}")


def text_input_to_block(element: TextInputElement) -> dict[str, Any]:
    input_element: dict[str, Any] = {
        "type": "plain_text_input",
        "action_id": element.id,
        "multiline": element.multiline,
    }
    if element.placeholder:
        input_element["placeholder"] = _plain(element.placeholder)
    if element.initial_value:
        input_element["initial_value"] = element.initial_value
    if element.max_length:
        input_element["max_length"] = element.max_length
    return {
        "type": "input",
        "block_id": element.id,
        "optional": element.optional,
        "label": _plain(element.label),
        "element": input_element,
    }


def select_to_block(element: SelectElement) -> dict[str, Any]:
    if len(element.options) > STATIC_SELECT_OPTIONS_MAX:
        logger.debug("Select %s: keeping the first %d options", element.id, STATIC_SELECT_OPTIONS_MAX)
    options = [option_to_object(o) for o in element.options[:STATIC_SELECT_OPTIONS_MAX]]
    select: dict[str, Any] = {
        "type": "static_select",
        "action_id": element.id,
        "options": options,
    }
    if element.placeholder:
        select["placeholder"] = _plain(element.placeholder)
    if element.initial_option:
        initial = next((o for o in options if o["value"] == element.initial_option), None)
        if initial is not None:
            select["initial_option"] = initial
    return {
        "type": "input",
        "block_id": element.id,
        "optional": element.optional,
        "label": _plain(element.label),
        "element": select,
    }


# -- view_submission responses -----------------------------------------------


@dataclass(frozen=True)
class ModalResponse:
    """What a submission handler wants Slack to do with the open view."""

    action: Literal["close", "errors", "update", "push"]
    errors: dict[str, str] | None = None
    modal: Modal | None = None


def modal_response_to_slack(
    response: ModalResponse,
    context_id: str | None = None,
    message_id: str | None = None,
) -> dict[str, Any]:
    """Build the view_submission ack body.

    ``update`` and ``push`` re-render the view, so pass the ids decoded from
    the submission to keep them for the next one.
    """
    if response.action == "close":
        return {}
    if response.action == "errors":
        return {"response_action": "errors", "errors": dict(response.errors or {})}
    if response.modal is None:
        raise ValueError(f"Modal response {response.action!r} requires a modal")
    return {
        "response_action": response.action,
        "view": render(response.modal, context_id, message_id),
    }
