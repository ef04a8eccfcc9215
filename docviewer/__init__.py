"""Flask extension rendering Markdown documentation and browsing module docs.

The package registers a markup template handler, exposes a ``markup_to_html``
helper to Jinja templates, and optionally mounts a documentation browser that
maps namespaced module names (``Foo::Bar``) to Markdown files on disk.

Exports
-------
- ``DocViewer``: the Flask extension.
- ``markup_to_html`` / ``render_markup_template``: helpers bound to the
  current application.
- ``process_page``: the HTML post-processor used by the browser.
- ``main``: Cyclopts CLI entry point.

Examples
--------
>>> from flask import Flask
>>> from docviewer import DocViewer
>>> app = Flask(__name__)
>>> _ = DocViewer(app, disable_browser=True)
>>> with app.app_context():
...     str(markup_to_html("*hi*"))
'<p><em>hi</em></p>'
"""

from __future__ import annotations

from .cli import app, main
from .config import ViewerConfig, ViewerConfigError, load_viewer_config
from .models import PageContext, PageResult, TopicEntry
from .modules import AllowList, ModuleIdentifier
from .plugin import DocViewer, ViewerState, markup_to_html, render_markup_template
from .postprocess import process_page

__all__ = [
    "AllowList",
    "DocViewer",
    "ModuleIdentifier",
    "PageContext",
    "PageResult",
    "TopicEntry",
    "ViewerConfig",
    "ViewerConfigError",
    "ViewerState",
    "app",
    "load_viewer_config",
    "main",
    "markup_to_html",
    "process_page",
    "render_markup_template",
]
