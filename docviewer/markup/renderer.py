"""Convert documentation markup into HTML fragments."""

from __future__ import annotations

import logging
import typing as typ

from markdown import Markdown
from markupsafe import escape

from docviewer._constants import EXTERNAL_DOC_BASE_URL

from .extensions import ModuleLinkExtension, VerbatimIndentExtension

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

logger = logging.getLogger(__name__)


class MarkupConverter:
    """Render Markdown documentation into HTML with module cross-references."""

    def __init__(
        self,
        external_base_url: str = EXTERNAL_DOC_BASE_URL,
        extensions: cabc.Sequence[Extension | str] | None = None,
    ) -> None:
        """Initialize a converter.

        Parameters
        ----------
        external_base_url : str, optional
            Prefix used for ``[[Module::Name]]`` links. Defaults to the
            metacpan POD URL.
        extensions : Sequence[Extension | str], optional
            Additional Markdown extensions appended after the built-in ones.
        """
        self.external_base_url = external_base_url
        self._extra_extensions = list(extensions or [])

    def _build(self) -> Markdown:
        extensions: list[Extension | str] = [
            "fenced_code",
            "tables",
            "sane_lists",
            "toc",
            ModuleLinkExtension(self.external_base_url),
            VerbatimIndentExtension(),
            *self._extra_extensions,
        ]
        return Markdown(extensions=extensions, output_format="html")

    def convert(self, source: object) -> str:
        """Render ``source`` into an HTML fragment.

        Parameters
        ----------
        source : str | Callable[[], object] | None
            Markup text, or a zero-argument callable producing it. ``None``
            renders to an empty string.

        Returns
        -------
        str
            The HTML fragment, or the HTML-escaped error message when the
            Markdown pipeline fails; conversion errors never propagate.
        """
        if callable(source):
            source = source()
        if source is None:
            return ""
        text = str(source)
        try:
            return self._build().convert(text)
        except Exception as exc:  # noqa: BLE001 - error text replaces output
            logger.warning("Markup conversion failed: %s", exc)
            return str(escape(str(exc)))


__all__ = ["MarkupConverter"]
