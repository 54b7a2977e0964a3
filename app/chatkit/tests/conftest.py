"""Shared pytest fixtures for app.chatkit tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from app.chatkit.messaging.elements import Card


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in list(os.environ):
        if key.startswith("CHATKIT_"):
            monkeypatch.delenv(key, raising=False)
    dotenv = tmp_path / ".env"
    monkeypatch.setenv("DOTENV_PATH", str(dotenv))
    return dotenv


@pytest.fixture(autouse=True)
def _reset_singletons(_isolate_env: Path):
    from app.chatkit.util.singletons import reset_all_singletons

    reset_all_singletons()
    yield
    reset_all_singletons()


@pytest.fixture()
def dotenv_path(_isolate_env: Path) -> Path:
    return _isolate_env


@pytest.fixture()
def order_card() -> Card:
    return Card.model_validate({
        "title": "Order #1234",
        "subtitle": "Placed today",
        "children": [
            {"type": "text", "content": "Your order has shipped."},
            {"type": "divider"},
            {
                "type": "fields",
                "children": [
                    {"type": "field", "label": "Status", "value": "Shipped"},
                    {"type": "field", "label": "Total", "value": "$42.00"},
                ],
            },
            {"type": "link", "url": "https://example.com/track", "label": "Track"},
            {
                "type": "actions",
                "children": [
                    {"type": "button", "id": "approve", "label": "Approve", "style": "primary"},
                    {"type": "button", "id": "reject", "label": "Reject", "style": "danger"},
                ],
            },
        ],
    })
