"""Server-side syntax highlighting for code samples."""

from __future__ import annotations

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from docviewer._constants import DEFAULT_HIGHLIGHT_LEXER


class SampleHighlighter:
    """Highlight code samples with Pygments using a consistent style."""

    def __init__(
        self, style: str = "monokai", language: str = DEFAULT_HIGHLIGHT_LEXER
    ) -> None:
        """Initialize a highlighter with a Pygments style and lexer name.

        Parameters
        ----------
        style : str, optional
            Name of the Pygments style used for the stylesheet. Defaults to
            ``"monokai"``.
        language : str, optional
            Pygments lexer name; falls back to ``"text"`` when the lookup
            fails.
        """
        self.style = style
        self.language = language
        self._formatter = HtmlFormatter(style=style, nowrap=True)
        try:
            self._lexer = get_lexer_by_name(language)
        except ClassNotFound:
            self._lexer = get_lexer_by_name("text")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted samples."""
        return self._formatter.get_style_defs(".prettyprint")

    def highlight(self, code: str) -> str:
        """Return ``code`` as highlighted HTML spans without a wrapper."""
        return highlight(code, self._lexer, self._formatter)


__all__ = ["SampleHighlighter"]
