"""Emoji name resolver -- neutral emoji ids to platform emoji syntax and back.

Slack addresses emoji by short name (``:+1:``), Discord by the unicode
glyph.  Messages carry platform-neutral ``{{emoji:name}}`` placeholders that
are resolved for the target platform at render time.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from .util.singletons import register_singleton


@dataclass(frozen=True, slots=True)
class EmojiFormats:
    """Platform spellings of one emoji; the first entry is the preferred one."""

    slack: tuple[str, ...]
    unicode: tuple[str, ...]

    @classmethod
    def of(cls, slack: str | tuple[str, ...], unicode: str | tuple[str, ...]) -> EmojiFormats:
        return cls(
            slack=(slack,) if isinstance(slack, str) else tuple(slack),
            unicode=(unicode,) if isinstance(unicode, str) else tuple(unicode),
        )


def _e(slack: str | tuple[str, ...], unicode: str | tuple[str, ...]) -> EmojiFormats:
    return EmojiFormats.of(slack, unicode)


DEFAULT_EMOJI_MAP: dict[str, EmojiFormats] = {
    # reactions & gestures
    "thumbs_up": _e(("+1", "thumbsup"), "👍"),
    "thumbs_down": _e(("-1", "thumbsdown"), "👎"),
    "clap": _e("clap", "👏"),
    "wave": _e("wave", "👋"),
    "pray": _e("pray", "🙏"),
    "muscle": _e("muscle", "💪"),
    "ok_hand": _e("ok_hand", "👌"),
    "point_up": _e("point_up", "👆"),
    "point_down": _e("point_down", "👇"),
    "point_left": _e("point_left", "👈"),
    "point_right": _e("point_right", "👉"),
    "raised_hands": _e("raised_hands", "🙌"),
    "shrug": _e("shrug", "🤷"),
    "facepalm": _e("facepalm", "🤦"),
    # emotions & faces
    "heart": _e("heart", ("❤️", "❤")),
    "smile": _e(("smile", "slightly_smiling_face"), "😊"),
    "laugh": _e(("laughing", "satisfied", "joy"), ("😂", "😆")),
    "thinking": _e("thinking_face", "🤔"),
    "sad": _e(("cry", "sad", "white_frowning_face"), "😢"),
    "cry": _e("sob", "😭"),
    "angry": _e("angry", "😠"),
    "love_eyes": _e("heart_eyes", "😍"),
    "cool": _e("sunglasses", "😎"),
    "wink": _e("wink", "😉"),
    "surprised": _e("open_mouth", "😮"),
    "worried": _e("worried", "😟"),
    "confused": _e("confused", "😕"),
    "neutral": _e("neutral_face", "😐"),
    "sleeping": _e("sleeping", "😴"),
    "sick": _e("nauseated_face", "🤢"),
    "mind_blown": _e("exploding_head", "🤯"),
    "relieved": _e("relieved", "😌"),
    "grimace": _e("grimacing", "😬"),
    "rolling_eyes": _e("rolling_eyes", "🙄"),
    "hug": _e("hugging_face", "🤗"),
    "zany": _e("zany_face", "🤪"),
    # status & symbols
    "check": _e(("white_check_mark", "heavy_check_mark"), ("✅", "✔️")),
    "x": _e(("x", "heavy_multiplication_x"), ("❌", "✖️")),
    "question": _e("question", "❓"),
    "exclamation": _e("exclamation", "❗"),
    "warning": _e("warning", "⚠️"),
    "stop": _e("octagonal_sign", "🛑"),
    "info": _e("information_source", "ℹ️"),
    "100": _e("100", "💯"),
    "fire": _e("fire", "🔥"),
    "star": _e("star", "⭐"),
    "sparkles": _e("sparkles", "✨"),
    "lightning": _e("zap", "⚡"),
    "boom": _e("boom", "💥"),
    "eyes": _e("eyes", "👀"),
    # colored circles
    "green_circle": _e("large_green_circle", "🟢"),
    "yellow_circle": _e("large_yellow_circle", "🟡"),
    "red_circle": _e("red_circle", "🔴"),
    "blue_circle": _e("large_blue_circle", "🔵"),
    "white_circle": _e("white_circle", "⚪"),
    "black_circle": _e("black_circle", "⚫"),
    # objects & tools
    "rocket": _e("rocket", "🚀"),
    "party": _e(("tada", "partying_face"), ("🎉", "🥳")),
    "confetti": _e("confetti_ball", "🎊"),
    "balloon": _e("balloon", "🎈"),
    "gift": _e("gift", "🎁"),
    "trophy": _e("trophy", "🏆"),
    "medal": _e("first_place_medal", "🥇"),
    "lightbulb": _e("bulb", "💡"),
    "gear": _e("gear", "⚙️"),
    "wrench": _e("wrench", "🔧"),
    "hammer": _e("hammer", "🔨"),
    "bug": _e("bug", "🐛"),
    "link": _e("link", "🔗"),
    "lock": _e("lock", "🔒"),
    "unlock": _e("unlock", "🔓"),
    "key": _e("key", "🔑"),
    "pin": _e("pushpin", "📌"),
    "memo": _e("memo", "📝"),
    "clipboard": _e("clipboard", "📋"),
    "calendar": _e("calendar", "📅"),
    "clock": _e("clock1", "🕐"),
    "hourglass": _e("hourglass", "⏳"),
    "bell": _e("bell", "🔔"),
    "megaphone": _e("mega", "📢"),
    "speech_bubble": _e("speech_balloon", "💬"),
    "email": _e("email", "📧"),
    "inbox": _e("inbox_tray", "📥"),
    "outbox": _e("outbox_tray", "📤"),
    "package": _e("package", "📦"),
    "folder": _e("file_folder", "📁"),
    "file": _e("page_facing_up", "📄"),
    "chart_up": _e("chart_with_upwards_trend", "📈"),
    "chart_down": _e("chart_with_downwards_trend", "📉"),
    "coffee": _e("coffee", "☕"),
    "pizza": _e("pizza", "🍕"),
    "beer": _e("beer", "🍺"),
    # arrows
    "arrow_up": _e("arrow_up", "⬆️"),
    "arrow_down": _e("arrow_down", "⬇️"),
    "arrow_left": _e("arrow_left", "⬅️"),
    "arrow_right": _e("arrow_right", "➡️"),
    "refresh": _e("arrows_counterclockwise", "🔄"),
    # nature & weather
    "sun": _e("sunny", "☀️"),
    "cloud": _e("cloud", "☁️"),
    "rain": _e("rain_cloud", "🌧️"),
    "snow": _e("snowflake", "❄️"),
    "rainbow": _e("rainbow", "🌈"),
}

EMOJI_PLACEHOLDER_RE = re.compile(r"\{\{emoji:([a-z0-9_]+)\}\}", re.IGNORECASE)


def emoji_placeholder(name: str) -> str:
    return f"{{{{emoji:{name}}}}}"


class EmojiResolver:
    """Bidirectional lookup between neutral emoji ids and platform names.

    The maps are built once and only read afterwards; :meth:`extend`
    rebuilds them and is meant for start-up registration of custom emoji.
    """

    def __init__(self, custom: Mapping[str, EmojiFormats] | None = None) -> None:
        self._map: dict[str, EmojiFormats] = {**DEFAULT_EMOJI_MAP, **(custom or {})}
        self._slack_index: dict[str, str] = {}
        self._unicode_index: dict[str, str] = {}
        self._build_indexes()

    def _build_indexes(self) -> None:
        slack_index: dict[str, str] = {}
        unicode_index: dict[str, str] = {}
        for name, formats in self._map.items():
            for alias in formats.slack:
                slack_index[alias.lower()] = name
            for glyph in formats.unicode:
                unicode_index[glyph] = name
        self._slack_index = slack_index
        self._unicode_index = unicode_index

    def extend(self, custom: Mapping[str, EmojiFormats]) -> None:
        self._map.update(custom)
        self._build_indexes()

    def to_platform_name(self, name: str, platform: str) -> str:
        """Return the preferred spelling of *name* on *platform*.

        Unknown ids are returned unchanged.
        """
        formats = self._map.get(name)
        if formats is None:
            return name
        if platform == "slack":
            return formats.slack[0]
        return formats.unicode[0]

    def from_platform_name(self, value: str, platform: str) -> str:
        """Map a platform emoji back to its neutral id (or *value* if unmapped)."""
        if platform == "slack":
            cleaned = value.strip(":").lower()
            return self._slack_index.get(cleaned, cleaned)
        if value.startswith(":") and value.endswith(":") and len(value) > 2:
            # Discord custom emoji surface as ``:name:`` after parsing.
            cleaned = value.strip(":").lower()
            return self._slack_index.get(cleaned, cleaned)
        return self._unicode_index.get(value, value)

    def matches(self, raw: str, name: str) -> bool:
        """True when *raw* (in any platform spelling) denotes emoji *name*."""
        formats = self._map.get(name)
        if formats is None:
            return raw == name
        cleaned = raw.strip(":").lower()
        return any(a.lower() == cleaned for a in formats.slack) or raw in formats.unicode

    def convert_placeholders(self, text: str, platform: str) -> str:
        def _sub(m: re.Match) -> str:
            resolved = self.to_platform_name(m.group(1), platform)
            return f":{resolved}:" if platform == "slack" else resolved

        return EMOJI_PLACEHOLDER_RE.sub(_sub, text)


default_resolver = EmojiResolver()


@register_singleton
def _reset_default_resolver() -> None:
    global default_resolver
    default_resolver = EmojiResolver()


def convert_emoji_placeholders(text: str, platform: str, resolver: EmojiResolver | None = None) -> str:
    """Replace ``{{emoji:name}}`` placeholders with *platform* emoji syntax.

    >>> convert_emoji_placeholders("Thanks! {{emoji:thumbs_up}}", "slack")
    'Thanks! :+1:'
    """
    return (resolver or default_resolver).convert_placeholders(text, platform)


def to_platform_name(name: str, platform: str) -> str:
    return default_resolver.to_platform_name(name, platform)


def from_platform_name(value: str, platform: str) -> str:
    return default_resolver.from_platform_name(value, platform)
