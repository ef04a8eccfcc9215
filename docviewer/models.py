"""Shared dataclasses used by the page post-processing pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import EXTERNAL_DOC_BASE_URL
from .modules import AllowList, ModuleIdentifier

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .markup.highlight import SampleHighlighter


class TopicEntry(typ.NamedTuple):
    """Heading text paired with its in-page fragment link."""

    text: str
    href: str


TopicGroup = list[TopicEntry]
TableOfContents = list[TopicGroup]


def _path_url(module: ModuleIdentifier) -> str:
    return f"/{module.path}"


@dc.dataclass(slots=True)
class PageContext:
    """Request details the post-processor needs to rewrite a page.

    Attributes
    ----------
    module : ModuleIdentifier
        Module whose documentation is being rendered.
    allow_list : AllowList
        Modules that may be linked to locally.
    external_base_url : str
        Prefix of links pointing at the external documentation site.
    local_url : Callable[[ModuleIdentifier], str]
        Builds the local browser URL for a permitted module.
    highlighter : SampleHighlighter | None
        Optional server-side highlighter for code samples.
    """

    module: ModuleIdentifier
    allow_list: AllowList = dc.field(default_factory=AllowList)
    external_base_url: str = EXTERNAL_DOC_BASE_URL
    local_url: cabc.Callable[[ModuleIdentifier], str] = _path_url
    highlighter: SampleHighlighter | None = None


@dc.dataclass(frozen=True, slots=True)
class PageResult:
    """Rewritten page HTML together with its title and table of contents.

    Attributes
    ----------
    html : str
        Post-processed HTML fragment ready for embedding.
    title : str
        Page title derived from the document.
    topics : TableOfContents
        Heading groups; each starts with a top-level heading.
    """

    html: str
    title: str
    topics: TableOfContents


__all__ = ["PageContext", "PageResult", "TableOfContents", "TopicEntry", "TopicGroup"]
