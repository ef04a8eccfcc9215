"""Typed dataclasses describing docviewer configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from docviewer._constants import (
    DEFAULT_HANDLER_NAME,
    DEFAULT_HIGHLIGHT_LEXER,
    DEFAULT_LAYOUT,
    DEFAULT_MODULE,
    DEFAULT_PREPROCESSOR,
    DEFAULT_ROUTE,
    EXTERNAL_DOC_BASE_URL,
)
from docviewer.modules import AllowList, ModuleIdentifier


class ViewerConfigError(ValueError):
    """Raised when the viewer configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ViewerConfig:
    """Options controlling the markup handler, helper, and doc browser.

    Attributes
    ----------
    handler_name : str
        Template suffix handled by the markup renderer (``guide.html.md``).
    route : str
        URL prefix the documentation browser is mounted under.
    default_module : ModuleIdentifier
        Module shown when the browser root is requested.
    allow_list : AllowList
        Modules served locally; the rest redirect to ``external_base_url``.
    layout : str
        Layout template name, resolved as ``layouts/<layout>.html``.
    disable_browser : bool
        Skip mounting the documentation browser entirely.
    preprocess : str
        Name of the preprocessor applied to markup templates.
    search_paths : list[Path]
        Directories searched, in order, for documentation files.
    external_base_url : str
        Prefix of the external documentation site.
    highlight_style : str | None
        Pygments style for server-side sample highlighting; ``None`` leaves
        highlighting to the client.
    highlight_lexer : str
        Pygments lexer used for highlighted samples.
    """

    handler_name: str = DEFAULT_HANDLER_NAME
    route: str = DEFAULT_ROUTE
    default_module: ModuleIdentifier = dc.field(
        default_factory=lambda: ModuleIdentifier.from_canonical(DEFAULT_MODULE)
    )
    allow_list: AllowList = dc.field(default_factory=AllowList)
    layout: str = DEFAULT_LAYOUT
    disable_browser: bool = False
    preprocess: str = DEFAULT_PREPROCESSOR
    search_paths: list[Path] = dc.field(default_factory=list)
    external_base_url: str = EXTERNAL_DOC_BASE_URL
    highlight_style: str | None = None
    highlight_lexer: str = DEFAULT_HIGHLIGHT_LEXER


__all__ = ["ViewerConfig", "ViewerConfigError"]
