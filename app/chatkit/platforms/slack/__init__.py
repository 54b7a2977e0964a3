"""Slack: mrkdwn codec, Block Kit cards, modals and interactive payloads."""

from .cards import RENDERER
from .markdown import CODEC

__all__ = ["CODEC", "RENDERER"]
