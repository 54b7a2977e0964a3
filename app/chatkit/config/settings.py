"""Converter settings -- read from environment and an optional ``.env`` file.

Grouped dataclasses keep per-platform knobs together.  Values are read once
at start-up (or on :meth:`Settings.reload`) and only read afterwards.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from dotenv import dotenv_values

from ..util.singletons import register_singleton

logger = logging.getLogger(__name__)

DISCORD_BLURPLE = 0x5865F2


@dataclass
class SlackConfig:
    fallback_include_actions: bool = False


@dataclass
class DiscordConfig:
    accent_color: int = DISCORD_BLURPLE
    fallback_include_actions: bool = True


@dataclass
class ModalConfig:
    metadata_max_bytes: int = 3000


@dataclass
class Settings:
    """Runtime configuration sourced from environment variables and ``.env``."""

    slack: SlackConfig = field(default_factory=SlackConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    modal: ModalConfig = field(default_factory=ModalConfig)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Re-read the ``.env`` file and environment variables."""
        dotenv = os.getenv("DOTENV_PATH") or ".env"
        self._file_values = {k: v for k, v in dotenv_values(dotenv).items() if v is not None}
        e = self._read

        self.log_level = (e("CHATKIT_LOG_LEVEL") or "INFO").upper()

        self.slack = SlackConfig(
            fallback_include_actions=_flag(e("CHATKIT_SLACK_FALLBACK_ACTIONS"), default=False),
        )
        self.discord = DiscordConfig(
            accent_color=_color(e("CHATKIT_DISCORD_ACCENT_COLOR")),
            fallback_include_actions=_flag(e("CHATKIT_DISCORD_FALLBACK_ACTIONS"), default=True),
        )
        self.modal = ModalConfig(
            metadata_max_bytes=int(e("CHATKIT_MODAL_METADATA_MAX_BYTES") or "3000"),
        )

    def _read(self, key: str) -> str:
        return self._file_values.get(key) or os.getenv(key, "")


def _flag(raw: str, *, default: bool) -> bool:
    if not raw:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _color(raw: str) -> int:
    if not raw:
        return DISCORD_BLURPLE
    try:
        return int(raw.removeprefix("#"), 16) if raw.startswith(("#", "0x")) else int(raw)
    except ValueError:
        logger.warning("Invalid CHATKIT_DISCORD_ACCENT_COLOR %r; using default", raw)
        return DISCORD_BLURPLE


# Module-level singleton
cfg = Settings()


def _reset_cfg() -> None:
    global cfg
    cfg = Settings()


register_singleton(_reset_cfg)
