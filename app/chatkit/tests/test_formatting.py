"""Tests for postable rendering, truncation and the platform registry."""

from __future__ import annotations

import pytest

from app.chatkit.markdown import tree as t
from app.chatkit.messaging.elements import Card
from app.chatkit.messaging.formatting import truncate_content
from app.chatkit.messaging.postable import (
    CardMessage,
    FileUpload,
    MarkdownMessage,
    PlainMessage,
    RawMessage,
    TreeMessage,
    files_of,
)
from app.chatkit.platforms import (
    PLATFORMS,
    convert,
    get_card_renderer,
    get_codec,
    get_modal_renderer,
    render_postable,
)


class TestTruncateContent:
    def test_short_text_unchanged(self) -> None:
        assert truncate_content("abc", 10) == "abc"

    def test_exact_cap_unchanged(self) -> None:
        assert truncate_content("a" * 10, 10) == "a" * 10

    def test_over_cap(self) -> None:
        assert truncate_content("abcdefghij", 8) == "abcde..."

    @pytest.mark.parametrize("platform, cap", [("slack", 40000), ("discord", 2000)])
    def test_platform_caps(self, platform: str, cap: int) -> None:
        out = render_postable("x" * (cap + 10), platform)
        assert len(out) == cap
        assert out == "x" * (cap - 3) + "..."


class TestRenderPostable:
    def test_string_gets_mentions_only(self) -> None:
        assert render_postable("**hi** @alice", "slack") == "**hi** <@alice>"

    def test_plain_message(self) -> None:
        assert render_postable(PlainMessage("hey @bob"), "discord") == "hey <@bob>"

    def test_raw_message(self) -> None:
        assert render_postable(RawMessage("<@U1> *x*"), "slack") == "<@U1> *x*"

    def test_markdown_message(self) -> None:
        assert render_postable(MarkdownMessage("**hi** ~~no~~"), "slack") == "*hi* ~no~"
        assert render_postable(MarkdownMessage("**hi** ~~no~~"), "discord") == "**hi** ~~no~~"

    def test_tree_message(self) -> None:
        tree = t.root([t.paragraph([t.emphasis([t.text("soft")])])])
        assert render_postable(TreeMessage(tree), "slack") == "_soft_"

    def test_card_message_prefers_fallback_text(self) -> None:
        card = Card(title="T")
        assert render_postable(CardMessage(card, fallback_text="custom"), "slack") == "custom"
        assert render_postable(CardMessage(card), "slack") == "*T*"
        assert render_postable(CardMessage(card), "discord") == "**T**"

    def test_unknown_variant_raises(self) -> None:
        with pytest.raises(TypeError):
            render_postable(42, "slack")  # type: ignore[arg-type]

    def test_files_of(self) -> None:
        upload = FileUpload("a.txt", b"hi", "text/plain")
        assert files_of(PlainMessage("x", files=(upload,))) == (upload,)
        assert files_of("x") == ()


class TestRegistry:
    def test_platforms(self) -> None:
        assert PLATFORMS == ("slack", "discord")
        for platform in PLATFORMS:
            assert get_codec(platform).platform == platform
            assert get_card_renderer(platform).platform == platform

    def test_unknown_platform(self) -> None:
        with pytest.raises(ValueError, match="teams"):
            get_codec("teams")
        with pytest.raises(ValueError):
            get_card_renderer("teams")

    def test_no_discord_modals(self) -> None:
        assert callable(get_modal_renderer("slack"))
        with pytest.raises(ValueError):
            get_modal_renderer("discord")

    def test_convert_between_dialects(self) -> None:
        assert convert("*hi* <@U1|alice>", "slack", "discord") == "**hi** <@alice>"
        assert convert("**hi** ~~x~~", "discord", "slack") == "*hi* ~x~"


class TestMentionIdempotence:
    @pytest.mark.parametrize("platform", PLATFORMS)
    def test_second_pass_is_noop(self, platform: str) -> None:
        once = render_postable("hey @alice, see <@U123>", platform)
        assert render_postable(once, platform) == once
        assert render_postable(MarkdownMessage(once), platform) == once
