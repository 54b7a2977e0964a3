"""Tests for the chatkit command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from app.chatkit.cli import main


@pytest.fixture()
def card_file(tmp_path: Path) -> Path:
    path = tmp_path / "card.json"
    path.write_text(json.dumps({
        "title": "Deploy",
        "children": [
            {"type": "text", "content": "Ready"},
            {"type": "actions", "children": [{"type": "button", "id": "go", "label": "Go"}]},
        ],
    }))
    return path


class TestCli:
    def test_render_card_slack(self, card_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render-card", str(card_file)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["text"] == "*Deploy*\nReady"
        assert [b["type"] for b in payload["blocks"]] == ["header", "section", "actions"]

    def test_render_card_discord_fallback(self, card_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["render-card", str(card_file), "--platform", "discord", "--fallback"]) == 0
        assert capsys.readouterr().out.strip() == "**Deploy**\n\nReady\n\n[Go]"

    def test_render_modal(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "modal.json"
        path.write_text(json.dumps({"callbackId": "f", "title": "Feedback"}))
        assert main(["render-modal", str(path), "--context-id", "ctx"]) == 0
        view = json.loads(capsys.readouterr().out)
        assert view["callback_id"] == "f"
        assert view["private_metadata"] == '{"c":"ctx"}'

    def test_convert(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["convert", "--from", "slack", "--to", "discord", "*hi* ~no~"]) == 0
        assert capsys.readouterr().out.strip() == "**hi** ~~no~~"

    def test_convert_from_markdown(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["convert", "--from", "markdown", "--to", "slack", "**hi**"]) == 0
        assert capsys.readouterr().out.strip() == "*hi*"

    def test_plain(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["plain", "--platform", "slack", "*bold* <@U1|ann>"]) == 0
        assert capsys.readouterr().out.strip() == "bold @ann"

    def test_invalid_card(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"children": [{"type": "video"}]}))
        assert main(["render-card", str(path)]) == 1
        assert "error" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main(["render-card", str(tmp_path / "nope.json")]) == 1

    def test_modal_for_discord_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "modal.json"
        path.write_text(json.dumps({"callbackId": "f", "title": "T"}))
        assert main(["render-modal", str(path), "--platform", "discord"]) == 1
