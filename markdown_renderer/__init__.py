"""Markdown Renderer - live Markdown preview and document outline."""

from .models import HeadingEntry
from .services.markdown_html import render_html
from .services.markdown_outline import extract_outline
from .version import __version__

__all__ = [
    "HeadingEntry",
    "render_html",
    "extract_outline",
    "__version__",
]
