"""Markdown extensions for module cross-references and verbatim indentation."""

from __future__ import annotations

import re
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.extensions.fenced_code import FencedBlockPreprocessor
from markdown.inlinepatterns import InlineProcessor
from markdown.preprocessors import Preprocessor
from markdown.treeprocessors import Treeprocessor
from markdown.util import AtomicString

from docviewer._constants import EXTERNAL_DOC_BASE_URL

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

MODULE_LINK_PATTERN = r"\[\[(\w+(?:::\w+)*)(?:\|([^\]]+))?\]\]"
LEADING_WHITESPACE = re.compile(r"^([ \t]+)\S", re.MULTILINE)


def _indentation(lines: cabc.Iterable[str]) -> str:
    """Return the shortest leading whitespace found on non-blank ``lines``."""
    shortest: str | None = None
    for line in lines:
        if not line.strip():
            continue
        match = LEADING_WHITESPACE.match(line)
        if match is None:
            return ""
        indent = match.group(1)
        if shortest is None or len(indent) < len(shortest):
            shortest = indent
    return shortest or ""


def strip_verbatim_indent(text: str) -> str:
    """Remove the indentation shared by every non-blank line of ``text``."""
    lines = text.split("\n")
    indent = _indentation(lines)
    if not indent:
        return text
    width = len(indent)
    return "\n".join(line[width:] if line.strip() else line.lstrip() for line in lines)


class ModuleLinkExtension(Extension):
    """Turn ``[[Foo::Bar]]`` references into links to the external doc site.

    ``[[Foo::Bar|label]]`` uses ``label`` as the link text. The generated
    ``href`` is ``<base_url>Foo::Bar``; the page post-processor later points
    permitted modules back at the local browser.
    """

    def __init__(self, base_url: str = EXTERNAL_DOC_BASE_URL) -> None:
        super().__init__()
        self.base_url = base_url

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the module-link inline processor on the Markdown instance."""
        processor = ModuleLinkInlineProcessor(MODULE_LINK_PATTERN, md, self.base_url)
        md.inlinePatterns.register(processor, "docviewer_module_links", 175)


class ModuleLinkInlineProcessor(InlineProcessor):
    """Emit ``<a>`` elements for double-bracketed module references."""

    def __init__(self, pattern: str, md: Markdown, base_url: str) -> None:
        super().__init__(pattern, md)
        self.base_url = base_url

    def handleMatch(  # type: ignore[override]  # noqa: N802
        self, m: re.Match[str], data: str
    ) -> tuple[Element, int, int]:
        """Build the anchor element for a matched module reference."""
        module, label = m.group(1), m.group(2)
        element = etree.Element("a")
        element.set("href", f"{self.base_url}{module}")
        element.text = (label or module).strip()
        return element, m.start(0), m.end(0)


class VerbatimIndentExtension(Extension):
    """Strip shared indentation from preformatted code blocks.

    Indented blocks are dedented in the element tree. Fenced blocks are stored
    as raw HTML by ``fenced_code`` before the tree exists, so their bodies are
    dedented in the source instead, ahead of that preprocessor.
    """

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the indentation processors on the Markdown instance."""
        md.preprocessors.register(
            FencedIndentPreprocessor(md), "docviewer_fenced_indent", 28
        )
        md.treeprocessors.register(
            VerbatimIndentTreeprocessor(md), "docviewer_verbatim_indent", 5
        )


class FencedIndentPreprocessor(Preprocessor):
    """Dedent the body of every fenced code block in the source."""

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with fenced block bodies dedented."""
        text = "\n".join(lines)
        return FencedBlockPreprocessor.FENCED_BLOCK_RE.sub(_dedent_fence, text).split(
            "\n"
        )


def _dedent_fence(match: re.Match[str]) -> str:
    block = match.group(0)
    start = match.start("code") - match.start()
    end = match.end("code") - match.start()
    return block[:start] + strip_verbatim_indent(match.group("code")) + block[end:]


class VerbatimIndentTreeprocessor(Treeprocessor):
    """Dedent the text of every ``pre > code`` element."""

    def run(self, root: Element) -> Element:
        """Rewrite code blocks in the parsed tree in place."""
        for pre in root.iter("pre"):
            for code in pre.findall("code"):
                if code.text:
                    code.text = AtomicString(strip_verbatim_indent(code.text))
        return root


__all__ = [
    "FencedIndentPreprocessor",
    "ModuleLinkExtension",
    "ModuleLinkInlineProcessor",
    "VerbatimIndentExtension",
    "VerbatimIndentTreeprocessor",
    "strip_verbatim_indent",
]
