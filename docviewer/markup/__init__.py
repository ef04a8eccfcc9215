"""Markup conversion: Markdown rendering, extensions, and sample highlighting."""

from .extensions import ModuleLinkExtension, VerbatimIndentExtension
from .highlight import SampleHighlighter
from .renderer import MarkupConverter

__all__ = [
    "MarkupConverter",
    "ModuleLinkExtension",
    "SampleHighlighter",
    "VerbatimIndentExtension",
]
