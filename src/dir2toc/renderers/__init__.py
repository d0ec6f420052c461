"""Renderers that turn a filtered directory tree into a table of contents."""

from .base_renderer import TreeRenderer
from .html_renderer import HTMLTreeRenderer
from .json_renderer import JSONTreeRenderer
from .text_renderer import TextTreeRenderer

RENDERERS = {
    "html": HTMLTreeRenderer,
    "text": TextTreeRenderer,
    "json": JSONTreeRenderer,
}

__all__ = [
    "RENDERERS",
    "HTMLTreeRenderer",
    "JSONTreeRenderer",
    "TextTreeRenderer",
    "TreeRenderer",
]
