"""Parsers for Slack interactive payloads (``block_actions``, ``view_*``).

Input is the JSON already decoded from the ``payload`` form field.  Parsing
never raises on incomplete payloads; unusable ones are logged and skipped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .modals import decode_modal_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionUser:
    user_id: str
    user_name: str
    full_name: str


@dataclass(frozen=True)
class ActionEvent:
    """One button click or select change from a message."""

    action_id: str
    value: str | None
    user: ActionUser
    channel: str
    message_ts: str
    thread_ts: str
    trigger_id: str | None = None
    block_id: str | None = None


@dataclass(frozen=True)
class ModalSubmitEvent:
    callback_id: str
    view_id: str
    user: ActionUser
    values: dict[str, str] = field(default_factory=dict)
    context_id: str | None = None
    message_id: str | None = None
    private_metadata: str | None = None


@dataclass(frozen=True)
class ModalCloseEvent:
    callback_id: str
    view_id: str
    user: ActionUser
    context_id: str | None = None
    message_id: str | None = None
    private_metadata: str | None = None


def _user(payload: dict[str, Any]) -> ActionUser:
    user = payload.get("user") or {}
    username = user.get("username") or user.get("name") or "unknown"
    return ActionUser(
        user_id=user.get("id", ""),
        user_name=username,
        full_name=user.get("name") or username,
    )


def parse_block_actions(payload: dict[str, Any]) -> list[ActionEvent]:
    """One :class:`ActionEvent` per entry in ``payload["actions"]``.

    The thread defaults to the message itself when the message is not a
    thread reply.
    """
    container = payload.get("container") or {}
    message = payload.get("message") or {}
    channel = (payload.get("channel") or {}).get("id") or container.get("channel_id")
    message_ts = message.get("ts") or container.get("message_ts")
    if not channel or not message_ts:
        logger.warning(
            "Missing channel or message_ts in block_actions (channel=%s, message_ts=%s)",
            channel, message_ts,
        )
        return []
    thread_ts = message.get("thread_ts") or container.get("thread_ts") or message_ts

    user = _user(payload)
    events = []
    for action in payload.get("actions") or []:
        selected = action.get("selected_option") or {}
        events.append(ActionEvent(
            action_id=action.get("action_id", ""),
            value=selected.get("value", action.get("value")),
            user=user,
            channel=channel,
            message_ts=message_ts,
            thread_ts=thread_ts,
            trigger_id=payload.get("trigger_id"),
            block_id=action.get("block_id"),
        ))
        logger.debug("Parsed block action %s on %s/%s", events[-1].action_id, channel, message_ts)
    return events


def flatten_view_values(state_values: dict[str, dict[str, Any]]) -> dict[str, str]:
    """``{block_id: {action_id: input}}`` -> ``{action_id: value}``."""
    values: dict[str, str] = {}
    for block in state_values.values():
        for action_id, entry in block.items():
            selected = entry.get("selected_option") or {}
            value = entry.get("value")
            values[action_id] = value if value is not None else selected.get("value", "")
    return values


def parse_view_submission(payload: dict[str, Any]) -> ModalSubmitEvent:
    view = payload.get("view") or {}
    meta = decode_modal_metadata(view.get("private_metadata"))
    return ModalSubmitEvent(
        callback_id=view.get("callback_id", ""),
        view_id=view.get("id", ""),
        user=_user(payload),
        values=flatten_view_values((view.get("state") or {}).get("values") or {}),
        context_id=meta.context_id,
        message_id=meta.message_id,
        private_metadata=meta.private_metadata,
    )


def parse_view_closed(payload: dict[str, Any]) -> ModalCloseEvent:
    view = payload.get("view") or {}
    meta = decode_modal_metadata(view.get("private_metadata"))
    return ModalCloseEvent(
        callback_id=view.get("callback_id", ""),
        view_id=view.get("id", ""),
        user=_user(payload),
        context_id=meta.context_id,
        message_id=meta.message_id,
        private_metadata=meta.private_metadata,
    )


def parse_interaction(payload: dict[str, Any]) -> list[ActionEvent] | ModalSubmitEvent | ModalCloseEvent | None:
    """Dispatch on ``payload["type"]``; unknown types return ``None``."""
    kind = payload.get("type")
    if kind == "block_actions":
        return parse_block_actions(payload)
    if kind == "view_submission":
        return parse_view_submission(payload)
    if kind == "view_closed":
        return parse_view_closed(payload)
    logger.debug("Ignoring Slack interactive payload of type %r", kind)
    return None
