"""Discord: markdown codec and embed/component cards."""

from .cards import RENDERER
from .markdown import CODEC

__all__ = ["CODEC", "RENDERER"]
