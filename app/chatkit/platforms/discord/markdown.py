"""Discord markdown <-> canonical tree.

Discord speaks standard markdown plus its own tokens:

* user mentions ``<@123>`` / ``<@!123>``, role mentions ``<@&123>``,
  channel mentions ``<#123>``
* custom emoji ``<:name:123>`` and animated ``<a:name:123>``
* spoilers ``||text||``
"""

from __future__ import annotations

import re

from ...markdown import tree as t
from ...markdown.grammar import parse_markdown
from ...markdown.render import dispatch, join_blocks, join_item_blocks, quote_lines, render_list, rewrite_outside_code
from ...messaging.formatting import FormatCodec, make_postable_renderer
from .cards import MAX_CONTENT_LENGTH, render_fallback

_INBOUND_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"<@!?(\w+)>"), r"@\1"),
    (re.compile(r"<@&(\w+)>"), r"@&\1"),
    (re.compile(r"<#(\w+)>"), r"#\1"),
    (re.compile(r"<a?:(\w+):\d+>"), r":\1:"),
    # no markdown equivalent; keep the content visible
    (re.compile(r"\|\|([^|]+)\|\|"), r"[spoiler: \1]"),
)

_ROLE_RE = re.compile(r"(?<![<\w])@&(\d+)")
_MENTION_RE = re.compile(r"(?<![<\w])@(?!(?:everyone|here)\b)(\w+)")
_CHANNEL_RE = re.compile(r"(?<![<\w&])#(\d{17,20})\b")
_SPOILER_RE = re.compile(r"\[spoiler: ([^\]]+)\]")


def _to_standard_markdown(text: str) -> str:
    for pattern, repl in _INBOUND_RULES:
        text = pattern.sub(repl, text)
    return text


def convert_mentions(text: str) -> str:
    """Wrap bare ``@user``, ``@&role`` and snowflake ``#channel`` references.

    ``@everyone`` / ``@here`` stay bare, as Discord expects, and wrapped
    tokens are never wrapped twice.
    """
    text = _ROLE_RE.sub(r"<@&\1>", text)
    text = _MENTION_RE.sub(r"<@\1>", text)
    return _CHANNEL_RE.sub(r"<#\1>", text)


def _restore_spoilers(text: str) -> str:
    return _SPOILER_RE.sub(r"||\1||", text)


def to_tree(discord_markdown: str) -> t.Root:
    """Parse Discord markdown into the canonical tree."""
    return parse_markdown(rewrite_outside_code(discord_markdown, _to_standard_markdown))


def extract_plain_text(discord_markdown: str) -> str:
    return t.to_plain_text(to_tree(discord_markdown))


# -- tree -> Discord markdown -------------------------------------------------


def _inline(children: tuple[t.Node, ...]) -> str:
    return "".join(_render(child) for child in children)


def _inline_run(children: tuple[t.Node, ...]) -> str:
    # A spoiler may wrap marked-up text, so it is restored over the whole run.
    return rewrite_outside_code(_inline(children), _restore_spoilers)


def _heading(node: t.Heading) -> str:
    # Discord only renders three heading levels.
    if node.depth > 3:
        return f"**{_inline_run(node.children)}**"
    return f"{'#' * node.depth} {_inline_run(node.children)}"


def _link(node: t.Link) -> str:
    label = _inline(node.children)
    if not label or label == node.url:
        return node.url
    return f"[{label}]({node.url})"


def _list_item(node: t.ListItem) -> str:
    return join_item_blocks(node.children, _render)


_RENDERERS = {
    "root": lambda n: join_blocks([_render(c) for c in n.children]),
    "paragraph": lambda n: _inline_run(n.children),
    "heading": _heading,
    "text": lambda n: convert_mentions(n.value),
    "strong": lambda n: f"**{_inline(n.children)}**",
    "emphasis": lambda n: f"*{_inline(n.children)}*",
    "strikethrough": lambda n: f"~~{_inline(n.children)}~~",
    "inline_code": lambda n: f"`{n.value}`",
    "code_block": lambda n: f"```{n.lang or ''}\n{n.value}\n```",
    "link": _link,
    "blockquote": lambda n: quote_lines(join_blocks([_render(c) for c in n.children])),
    "list": lambda n: render_list(n, _render, "-"),
    "list_item": _list_item,
    "line_break": lambda n: "\n",
    "thematic_break": lambda n: "---",
}


def _render(node: t.Node) -> str:
    return dispatch(_RENDERERS, node)


def from_tree(root: t.Root) -> str:
    """Render the canonical tree as Discord markdown."""
    return _render(root)


render_postable = make_postable_renderer(from_tree, convert_mentions, render_fallback)

CODEC = FormatCodec(
    platform="discord",
    to_tree=to_tree,
    from_tree=from_tree,
    extract_plain_text=extract_plain_text,
    render_postable=render_postable,
    max_content_length=MAX_CONTENT_LENGTH,
)
