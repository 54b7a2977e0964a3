"""Slack mrkdwn <-> canonical tree.

Slack's dialect differs from standard markdown:

* bold ``*text*``, italic ``_text_``, strikethrough ``~text~``
* links ``<url|text>``, bare links ``<url>``
* mentions ``<@U123>`` / ``<@U123|name>``, channels ``<#C123|name>``,
  broadcasts ``<!here>``
"""

from __future__ import annotations

import re

from ...markdown import tree as t
from ...markdown.grammar import parse_markdown
from ...markdown.render import dispatch, join_blocks, join_item_blocks, quote_lines, render_list, rewrite_outside_code
from ...messaging.formatting import FormatCodec, make_postable_renderer
from .cards import render_fallback

MAX_TEXT_LENGTH = 40000

_INBOUND_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"<@([^|>]+)\|([^>]+)>"), r"@\2"),
    (re.compile(r"<@([^>]+)>"), r"@\1"),
    (re.compile(r"<#[^|>]+\|([^>]+)>"), r"#\1"),
    (re.compile(r"<#([^>]+)>"), r"#\1"),
    (re.compile(r"<!(here|channel|everyone)(?:\|[^>]*)?>"), r"@\1"),
    (re.compile(r"<!subteam\^[^|>]+\|([^>]+)>"), r"\1"),
    # labelled links only; a bare <url> is already a CommonMark autolink
    (re.compile(r"<((?:https?|mailto):[^|>]+)\|([^>]+)>"), r"[\2](\1)"),
    # entity-escaped quotes and bullet glyphs as sent by Slack clients
    (re.compile(r"^&gt;[ ]?", re.MULTILINE), "> "),
    (re.compile(r"^((?:[ \t]*>[ ]?)*[ \t]*)•[ \t]+", re.MULTILINE), r"\1- "),
    # single-asterisk bold -> standard strong
    (re.compile(r"(?<![_*\\])\*([^*\n]+)\*(?![_*])"), r"**\1**"),
    # single-tilde strike -> GFM strikethrough
    (re.compile(r"(?<!~)~([^~\n]+)~(?!~)"), r"~~\1~~"),
)

_BROADCAST_RE = re.compile(r"(?<![<\w!])@(here|channel|everyone)\b")
_MENTION_RE = re.compile(r"(?<![<\w!])@(\w+)")
# already-wrapped control sequences: mentions, channels, broadcasts
_CONTROL_RE = re.compile(r"(<[@#!][^<>\n]*>)")
_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})


def _to_standard_markdown(mrkdwn: str) -> str:
    for pattern, repl in _INBOUND_RULES:
        mrkdwn = pattern.sub(repl, mrkdwn)
    return mrkdwn


def escape_text(text: str) -> str:
    """Entity-escape ``&``, ``<`` and ``>`` outside existing control sequences."""
    parts = _CONTROL_RE.split(text)
    return "".join(part if i % 2 else part.translate(_ESCAPES) for i, part in enumerate(parts))


def convert_mentions(text: str) -> str:
    """``@name`` -> ``<@name>``; already wrapped mentions are left alone."""
    text = _BROADCAST_RE.sub(r"<!\1>", text)
    return _MENTION_RE.sub(r"<@\1>", text)


def to_tree(mrkdwn: str) -> t.Root:
    """Parse Slack mrkdwn into the canonical tree."""
    return parse_markdown(rewrite_outside_code(mrkdwn, _to_standard_markdown))


def extract_plain_text(mrkdwn: str) -> str:
    return t.to_plain_text(to_tree(mrkdwn))


# -- tree -> mrkdwn ----------------------------------------------------------


def _inline(children: tuple[t.Node, ...]) -> str:
    return "".join(_render(child) for child in children)


def _link(node: t.Link) -> str:
    label = _inline(node.children)
    if not label or label == escape_text(node.url):
        return f"<{node.url}>"
    return f"<{node.url}|{label}>"


def _list_item(node: t.ListItem) -> str:
    return join_item_blocks(node.children, _render)


_RENDERERS = {
    "root": lambda n: join_blocks([_render(c) for c in n.children]),
    "paragraph": lambda n: _inline(n.children),
    "heading": lambda n: f"*{_inline(n.children)}*",
    "text": lambda n: convert_mentions(escape_text(n.value)),
    "strong": lambda n: f"*{_inline(n.children)}*",
    "emphasis": lambda n: f"_{_inline(n.children)}_",
    "strikethrough": lambda n: f"~{_inline(n.children)}~",
    "inline_code": lambda n: f"`{n.value}`",
    "code_block": lambda n: f"```{n.lang or ''}\n{n.value}\n```",
    "link": _link,
    "blockquote": lambda n: quote_lines(join_blocks([_render(c) for c in n.children])),
    "list": lambda n: render_list(n, _render, "•"),
    "list_item": _list_item,
    "line_break": lambda n: "\n",
    "thematic_break": lambda n: "---",
}


def _render(node: t.Node) -> str:
    return dispatch(_RENDERERS, node)


def from_tree(root: t.Root) -> str:
    """Render the canonical tree as Slack mrkdwn."""
    return _render(root)


render_postable = make_postable_renderer(from_tree, convert_mentions, render_fallback)

CODEC = FormatCodec(
    platform="slack",
    to_tree=to_tree,
    from_tree=from_tree,
    extract_plain_text=extract_plain_text,
    render_postable=render_postable,
    max_content_length=MAX_TEXT_LENGTH,
)
