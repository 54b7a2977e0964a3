"""Tests for the Slack mrkdwn codec."""

from __future__ import annotations

import pytest

from app.chatkit.markdown import tree as t
from app.chatkit.platforms.slack.markdown import CODEC, convert_mentions, extract_plain_text, from_tree, to_tree


class TestSlackToTree:
    def test_dialect_marks(self) -> None:
        (para,) = to_tree("*bold* _it_ ~strike~").children
        assert para.children == (
            t.strong([t.text("bold")]),
            t.text(" "),
            t.emphasis([t.text("it")]),
            t.text(" "),
            t.strikethrough([t.text("strike")]),
        )

    def test_labelled_link(self) -> None:
        (para,) = to_tree("<https://example.com|site>").children
        assert para.children == (t.link("https://example.com", [t.text("site")]),)

    def test_bare_link(self) -> None:
        (para,) = to_tree("see <https://example.com>").children
        assert para.children[-1].kind == "link"

    def test_mentions_become_plain_handles(self) -> None:
        assert extract_plain_text("hi <@U123|alice> and <@U456>") == "hi @alice and @U456"

    def test_channel_and_broadcast(self) -> None:
        assert extract_plain_text("<#C1|general> <!here>") == "#general @here"

    def test_code_untouched(self) -> None:
        (para,) = to_tree("`*not bold*`").children
        assert para.children == (t.inline_code("*not bold*"),)

    def test_escaped_quote_and_bullets(self) -> None:
        root = to_tree("&gt; quoted\n\n• one\n• two")
        assert [c.kind for c in root.children] == ["blockquote", "list"]


class TestSlackFromTree:
    def test_markdown_marks(self) -> None:
        assert CODEC.from_markdown("**bold** *it* ~~gone~~") == "*bold* _it_ ~gone~"

    def test_link(self) -> None:
        assert CODEC.from_markdown("[site](https://example.com)") == "<https://example.com|site>"

    def test_link_label_equal_to_url(self) -> None:
        assert CODEC.from_markdown("<https://example.com>") == "<https://example.com>"

    def test_heading_rendered_bold(self) -> None:
        assert CODEC.from_markdown("# Title") == "*Title*"

    def test_lists(self) -> None:
        assert CODEC.from_markdown("- a\n- b") == "• a\n• b"
        assert CODEC.from_markdown("1. a\n2. b") == "1. a\n2. b"

    def test_code_block(self) -> None:
        assert CODEC.from_markdown("```js\nx()\n```") == "```js\nx()\n```"

    def test_blocks_separated(self) -> None:
        assert CODEC.from_markdown("one\n\ntwo") == "one\n\ntwo"

    def test_roundtrip_preserves_structure(self) -> None:
        src = "*bold* _it_ ~s~ <https://example.com|site>"
        assert from_tree(to_tree(src)) == src
        assert to_tree(from_tree(to_tree(src))) == to_tree(src)

    @pytest.mark.parametrize("src", [
        "1. a\n   • b\n   • c\n2. d",
        "• a\n  • b\n    • c\n• d",
        "• a\n\n  para2\n• b",
        "> one\n>\n> two",
        "```py\nx = 1\n```",
    ])
    def test_block_roundtrip(self, src: str) -> None:
        assert from_tree(to_tree(src)) == src
        assert to_tree(from_tree(to_tree(src))) == to_tree(src)

    def test_quoted_bullets_roundtrip(self) -> None:
        tree = to_tree("&gt; • a\n&gt; • b")
        assert [c.kind for c in tree.children[0].children] == ["list"]
        assert from_tree(tree) == "> • a\n> • b"
        assert to_tree(from_tree(tree)) == tree

    def test_control_characters_escaped(self) -> None:
        src = "a &lt; b &amp; c &gt; d"
        (para,) = to_tree(src).children
        assert para.children == (t.text("a < b & c > d"),)
        assert from_tree(to_tree(src)) == src

    def test_wrapped_tokens_not_escaped(self) -> None:
        assert CODEC.from_markdown("1 < 2 <@U1> & <!here>") == "1 &lt; 2 <@U1> &amp; <!here>"


class TestSlackMentions:
    def test_bare_mention_wrapped(self) -> None:
        assert CODEC.from_markdown("hello @alice") == "hello <@alice>"

    def test_broadcast(self) -> None:
        assert convert_mentions("@here ping") == "<!here> ping"

    def test_idempotent(self) -> None:
        once = convert_mentions("hi @alice and <@U123> @channel")
        assert convert_mentions(once) == once
        assert once == "hi <@alice> and <@U123> <!channel>"

    def test_email_not_a_mention(self) -> None:
        assert convert_mentions("mail bob@example.com") == "mail bob@example.com"

    def test_mentions_in_code_left_alone(self) -> None:
        assert CODEC.from_markdown("`@alice`") == "`@alice`"


class TestSlackCodecTable:
    def test_platform_and_cap(self) -> None:
        assert CODEC.platform == "slack"
        assert CODEC.max_content_length == 40000

    def test_to_markdown(self) -> None:
        assert CODEC.to_markdown("*hi* <https://example.com|x>") == "**hi** [x](https://example.com)"
