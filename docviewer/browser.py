"""Flask blueprint that serves module documentation as browsable pages.

Requests for ``<route>/Foo/Bar`` are resolved to the ``Foo::Bar`` module,
checked against the allow-list, located on disk, and either returned as raw
source (``.txt`` or ``Accept: text/plain``) or converted, post-processed, and
rendered inside the configured layout. Anything that cannot be served locally
redirects to the external documentation site instead of failing.

Templates ``docviewer/page.html`` and ``layouts/docviewer.html`` ship with the
package; an application template with the same name takes precedence.
"""

from __future__ import annotations

import logging
import typing as typ

from flask import (
    Blueprint,
    Response,
    current_app,
    redirect,
    render_template,
    request,
    url_for,
)
from markupsafe import Markup

from ._constants import ENDPOINT, EXTENSION_KEY
from .models import PageContext
from .modules import InvalidModuleError, ModuleIdentifier
from .postprocess import process_page

if typ.TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

    from .config import ViewerConfig
    from .plugin import ViewerState

logger = logging.getLogger(__name__)

FORMAT_SUFFIXES = {".txt": "txt", ".html": "html"}
NEGOTIATED_TYPES = {"text/html": "html", "text/plain": "txt"}


def _split_format(module_path: str) -> tuple[str, str | None]:
    """Strip a trailing ``.txt``/``.html`` from the path and return the format."""
    for suffix, fmt in FORMAT_SUFFIXES.items():
        if module_path.endswith(suffix):
            return module_path[: -len(suffix)], fmt
    return module_path, None


def _negotiate_format() -> str:
    best = request.accept_mimetypes.best_match(
        list(NEGOTIATED_TYPES), default="text/html"
    )
    return NEGOTIATED_TYPES.get(best or "text/html", "html")


def local_url(module: ModuleIdentifier) -> str:
    """Return the browser URL for ``module``."""
    return url_for(ENDPOINT, module=module.path)


def breadcrumbs(module: ModuleIdentifier) -> list[tuple[str, str]]:
    """Return ``(segment, url)`` pairs for each leading namespace of ``module``."""
    return [(parent.segments[-1], local_url(parent)) for parent in module.parents]


def _external_redirect(config: ViewerConfig, name: str, reason: str) -> Response:
    target = f"{config.external_base_url}{name}"
    logger.info("Redirecting %s to %s: %s", name, target, reason)
    return redirect(target)


def show_page(module: str | None = None) -> ResponseReturnValue:
    """Serve the documentation for ``module`` or redirect to the external site."""
    state: ViewerState = current_app.extensions[EXTENSION_KEY]
    config = state.config

    fmt: str | None = None
    if module is None:
        identifier = config.default_module
    else:
        module, fmt = _split_format(module)
        try:
            identifier = ModuleIdentifier.parse(module)
        except InvalidModuleError:
            return _external_redirect(config, module.replace("/", "::"), "invalid name")

    if not config.allow_list.permits(identifier):
        return _external_redirect(config, identifier.canonical, "not allowed")

    path = state.locator.find(identifier)
    if path is None:
        return _external_redirect(config, identifier.canonical, "not found")
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _external_redirect(config, identifier.canonical, f"unreadable: {exc}")

    if (fmt or _negotiate_format()) == "txt":
        return Response(source, mimetype="text/plain")
    return render_documentation(state, identifier, source)


def render_documentation(
    state: ViewerState, module: ModuleIdentifier, source: str
) -> str:
    """Convert ``source`` and render it in the documentation page template."""
    config = state.config
    ctx = PageContext(
        module=module,
        allow_list=config.allow_list,
        external_base_url=config.external_base_url,
        local_url=local_url,
        highlighter=state.highlighter,
    )
    result = process_page(state.converter.convert(source), ctx)
    return render_template(
        "docviewer/page.html",
        module=module,
        crumbs=breadcrumbs(module),
        external_url=f"{config.external_base_url}{module.canonical}",
        source_url=url_for(ENDPOINT, module=f"{module.path}.txt"),
        title=result.title,
        topics=result.topics,
        content=Markup(result.html),
        layout=f"layouts/{config.layout}.html",
        pygments_css=state.highlighter.stylesheet if state.highlighter else "",
    )


def create_blueprint(config: ViewerConfig) -> Blueprint:
    """Build the documentation browser mounted under ``config.route``."""
    blueprint = Blueprint(
        "docviewer",
        __name__,
        template_folder="templates",
        url_prefix=config.route,
    )
    blueprint.add_url_rule(
        "/", endpoint="page", view_func=show_page, defaults={"module": None}
    )
    blueprint.add_url_rule("/<path:module>", endpoint="page", view_func=show_page)
    return blueprint


__all__ = [
    "breadcrumbs",
    "create_blueprint",
    "local_url",
    "render_documentation",
    "show_page",
]
