r"""Rewrite converted documentation HTML for the browser.

A single pass over the converted fragment points permitted module links at the
local browser, tags code samples for highlighting, replaces every heading with
a permalink plus a link back to the table of contents, and collects the
headings into :class:`~docviewer.models.TopicEntry` groups.

Example
-------
>>> from docviewer.models import PageContext
>>> from docviewer.modules import ModuleIdentifier
>>> from docviewer.postprocess import process_page
>>> result = process_page(
...     '<h1 id="name">NAME</h1><p>Foo - does things</p>',
...     PageContext(module=ModuleIdentifier.from_canonical("Foo")),
... )
>>> result.title
'Foo - does things'
>>> result.topics
[[TopicEntry(text='NAME', href='#name')]]
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup

from ._constants import DEFAULT_TITLE
from .models import PageContext, PageResult, TableOfContents, TopicEntry
from .modules import parse_module_reference

if typ.TYPE_CHECKING:
    from bs4 import Tag

TRANSCRIPT_PATTERN = re.compile(r"^\s*(?:\$|Usage:)\s+", re.MULTILINE)
SAMPLE_PATTERN = re.compile(r"[$@%]\w|-(?:&gt;|>)\w|^use\s+\w", re.MULTILINE)
SAMPLE_CLASS = "prettyprint"
TRANSCRIPT_CLASS = "sample"
HEADINGS = ["h1", "h2", "h3", "h4"]


def _slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "section"


def _unique_slug(base: str, used: set[str]) -> str:
    """Generate a unique slug, appending numeric suffixes when needed."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def _add_class(tag: Tag, name: str) -> None:
    classes = list(tag.get("class") or [])
    if name not in classes:
        classes.append(name)
    tag["class"] = classes


def rewrite_links(soup: BeautifulSoup, ctx: PageContext) -> None:
    """Point links at permitted external modules to the local browser."""
    for anchor in soup.select("a[href]"):
        href = str(anchor["href"])
        reference = parse_module_reference(href, ctx.external_base_url)
        if reference is None:
            continue
        module, remainder = reference
        if not ctx.allow_list.permits(module):
            continue
        anchor["href"] = ctx.local_url(module) + remainder.replace("::", "/")


def classify_sample(content: str) -> str | None:
    """Return ``"transcript"``, ``"sample"``, or ``None`` for a code block.

    ``content`` is the entity-encoded inner HTML of the block. Console
    transcripts win over samples when both patterns match.
    """
    if TRANSCRIPT_PATTERN.search(content):
        return "transcript"
    if SAMPLE_PATTERN.search(content):
        return "sample"
    return None


def tag_code_samples(soup: BeautifulSoup, ctx: PageContext) -> None:
    """Mark ``pre > code`` blocks as transcripts or highlightable samples."""
    for code in soup.select("pre > code"):
        kind = classify_sample(code.decode_contents())
        if kind == "transcript":
            _add_class(code.parent, TRANSCRIPT_CLASS)
        elif kind == "sample":
            _add_class(code, SAMPLE_CLASS)
            if ctx.highlighter is not None:
                highlighted = ctx.highlighter.highlight(code.get_text())
                fragment = BeautifulSoup(highlighted, "html.parser")
                code.clear()
                for node in list(fragment.contents):
                    code.append(node.extract())


def rewrite_headings(soup: BeautifulSoup) -> TableOfContents:
    """Replace heading content with navigation links and build the TOC.

    Every ``h1`` starts a new topic group, as does the first heading of the
    page whatever its level. Headings lacking an ``id`` receive a unique one.
    """
    topics: TableOfContents = []
    used = {str(tag["id"]) for tag in soup.find_all(id=True)}
    for heading in soup.find_all(HEADINGS):
        if heading.name == "h1" or not topics:
            topics.append([])
        text = heading.get_text()
        anchor = heading.get("id")
        if not anchor:
            anchor = _unique_slug(_slugify(text), used)
            heading["id"] = anchor
        fragment = f"#{anchor}"
        topics[-1].append(TopicEntry(text, fragment))

        permalink = soup.new_tag("a", attrs={"class": "permalink", "href": fragment})
        permalink.string = "#"
        back = soup.new_tag("a", href="#toc")
        back.string = text
        heading.clear()
        heading.append(permalink)
        heading.append(back)
    return topics


def extract_title(soup: BeautifulSoup, default: str = DEFAULT_TITLE) -> str:
    """Return the text of the first paragraph directly after an ``h1``."""
    paragraph = soup.select_one("h1 + p")
    if paragraph is None:
        return default
    return paragraph.get_text().strip() or default


def process_page(html: str, ctx: PageContext) -> PageResult:
    """Rewrite converted documentation HTML and collect its navigation.

    Parameters
    ----------
    html : str
        HTML fragment produced by the markup converter; may be empty or
        malformed.
    ctx : PageContext
        Current module, allow-list, and link builders for the request.

    Returns
    -------
    PageResult
        The rewritten HTML, derived title, and grouped table of contents.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    rewrite_links(soup, ctx)
    tag_code_samples(soup, ctx)
    topics = rewrite_headings(soup)
    title = extract_title(soup)
    return PageResult(html=str(soup), title=title, topics=topics)


__all__ = [
    "classify_sample",
    "extract_title",
    "process_page",
    "rewrite_headings",
    "rewrite_links",
    "tag_code_samples",
]
