"""Flask extension wiring the markup handler, helper, and doc browser.

:class:`DocViewer` follows the usual Flask extension shape: construct it with
an application, or call :meth:`DocViewer.init_app` later. Registration

* resolves the configured preprocessor once, from :data:`PREPROCESSORS`, and
  stores the application's :class:`ViewerState` in ``app.extensions``;
* exposes ``markup_to_html`` to Jinja as a global and as a filter;
* mounts the documentation browser blueprint unless ``disable_browser`` is
  set.

Examples
--------
>>> from flask import Flask
>>> from docviewer import DocViewer
>>> app = Flask(__name__)
>>> viewer = DocViewer(app, search_paths=["docs"], allow_modules=[r"^MyApp"])
>>> sorted(rule.rule for rule in app.url_map.iter_rules())[:2]
['/perldoc/', '/perldoc/<path:module>']

Inside templates::

    {{ markup_to_html("# Heading") }}
    {% filter markup_to_html %}# Heading{% endfilter %}
    {% call markup_to_html() %}# Heading{% endcall %}
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from flask import current_app, render_template
from markupsafe import Markup

from ._constants import EXTENSION_KEY
from .browser import create_blueprint
from .config import ViewerConfig, ViewerConfigError, build_viewer_config
from .locator import ModuleLocator
from .markup import MarkupConverter, SampleHighlighter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from flask import Blueprint, Flask

logger = logging.getLogger(__name__)

Preprocessor = typ.Callable[[str, typ.Mapping[str, typ.Any]], str]


def _jinja_preprocess(template_name: str, context: typ.Mapping[str, typ.Any]) -> str:
    """Render ``template_name`` through the application's Jinja environment."""
    return render_template(template_name, **context)


def _raw_preprocess(template_name: str, context: typ.Mapping[str, typ.Any]) -> str:  # noqa: ARG001
    """Return the template source untouched."""
    env = current_app.jinja_env
    source, _filename, _uptodate = env.loader.get_source(env, template_name)  # type: ignore[union-attr]
    return source


PREPROCESSORS: dict[str, Preprocessor] = {
    "jinja": _jinja_preprocess,
    "none": _raw_preprocess,
}


@dc.dataclass(slots=True)
class ViewerState:
    """Documentation state for one application, kept in ``app.extensions``."""

    config: ViewerConfig
    converter: MarkupConverter
    locator: ModuleLocator
    preprocessor: Preprocessor
    highlighter: SampleHighlighter | None = None
    blueprint: Blueprint | None = None

    @classmethod
    def from_config(cls, config: ViewerConfig) -> ViewerState:
        """Build the converter, locator, and highlighter ``config`` describes.

        Raises
        ------
        ViewerConfigError
            If ``config.preprocess`` names an unknown preprocessor.
        """
        try:
            preprocessor = PREPROCESSORS[config.preprocess]
        except KeyError:
            known = ", ".join(sorted(PREPROCESSORS))
            msg = f"Unknown preprocessor {config.preprocess!r}; expected one of {known}."
            raise ViewerConfigError(msg) from None
        highlighter = (
            SampleHighlighter(config.highlight_style, config.highlight_lexer)
            if config.highlight_style
            else None
        )
        return cls(
            config=config,
            converter=MarkupConverter(config.external_base_url),
            locator=ModuleLocator(config.search_paths),
            preprocessor=preprocessor,
            highlighter=highlighter,
        )

    def markup_to_html(
        self, source: object = None, caller: cabc.Callable[[], object] | None = None
    ) -> Markup:
        """Convert markup to HTML without preprocessing.

        ``caller`` is supplied by Jinja ``{% call %}`` blocks and takes
        precedence over ``source``.
        """
        return Markup(self.converter.convert(caller if caller is not None else source))

    def render_template(self, template_name: str, **context: typ.Any) -> Markup:
        """Preprocess a markup template, then convert it to HTML.

        ``template_name`` is resolved to ``<name>.html.<handler_name>`` unless
        it already ends with the handler suffix.
        """
        suffix = f".{self.config.handler_name}"
        if not template_name.endswith(suffix):
            template_name = f"{template_name}.html{suffix}"
        output = self.preprocessor(template_name, context)
        return Markup(self.converter.convert(output))


class DocViewer:
    """Markup rendering and documentation browsing for Flask applications.

    One instance may be registered on several applications; each keeps its
    own :class:`ViewerState` under ``app.extensions["docviewer"]``.
    """

    def __init__(
        self,
        app: Flask | None = None,
        config: ViewerConfig | typ.Mapping[str, typ.Any] | None = None,
        **options: typ.Any,
    ) -> None:
        """Store options and register on ``app`` when one is given.

        Parameters
        ----------
        app : Flask, optional
            Application to register on immediately.
        config : ViewerConfig | Mapping[str, Any], optional
            Resolved configuration or raw options. When omitted, options are
            read from ``app.config["DOCVIEWER"]`` at registration time.
        **options : Any
            Individual option overrides merged over ``config``.
        """
        self._config_source = config
        self._options = options
        if app is not None:
            self.init_app(app)

    def _resolve_config(self, app: Flask) -> ViewerConfig:
        source = self._config_source
        if isinstance(source, ViewerConfig) and not self._options:
            return source
        if isinstance(source, ViewerConfig):
            msg = "Pass either a ViewerConfig or keyword options, not both."
            raise ViewerConfigError(msg)
        payload: dict[str, typ.Any] = dict(
            source if source is not None else app.config.get("DOCVIEWER") or {}
        )
        payload.update(self._options)
        return build_viewer_config(payload, base_dir=Path(app.root_path))

    def init_app(self, app: Flask) -> Blueprint | None:
        """Register the handler, helper, and browser on ``app``.

        Returns
        -------
        Blueprint | None
            The mounted documentation browser, or ``None`` when the browser
            is disabled.

        Raises
        ------
        ViewerConfigError
            If the options are invalid or name an unknown preprocessor.
        """
        config = self._resolve_config(app)
        state = ViewerState.from_config(config)
        app.extensions[EXTENSION_KEY] = state
        app.add_template_global(markup_to_html, "markup_to_html")
        app.add_template_filter(markup_to_html, "markup_to_html")

        if config.disable_browser:
            logger.debug("Documentation browser disabled")
            return None

        state.blueprint = create_blueprint(config)
        app.register_blueprint(state.blueprint)
        logger.debug(
            "Documentation browser mounted at %s for %d search path(s)",
            config.route or "/",
            len(config.search_paths),
        )
        return state.blueprint

    def state(self, app: Flask | None = None) -> ViewerState:
        """Return the state registered on ``app`` or on the current app."""
        return _viewer_state(app)

    def markup_to_html(
        self, source: object = None, caller: cabc.Callable[[], object] | None = None
    ) -> Markup:
        """Convert markup with the current application's converter."""
        return _viewer_state().markup_to_html(source, caller)

    def render_template(self, template_name: str, **context: typ.Any) -> Markup:
        """Render a markup template with the current application's options."""
        return _viewer_state().render_template(template_name, **context)


def _viewer_state(app: Flask | None = None) -> ViewerState:
    target = app if app is not None else current_app
    try:
        return target.extensions[EXTENSION_KEY]
    except KeyError:
        msg = "DocViewer is not registered on the current application."
        raise RuntimeError(msg) from None


def markup_to_html(
    source: object = None, caller: cabc.Callable[[], object] | None = None
) -> Markup:
    """Convert markup with the current application's viewer."""
    return _viewer_state().markup_to_html(source, caller)


def render_markup_template(template_name: str, **context: typ.Any) -> Markup:
    """Render a markup template with the current application's viewer."""
    return _viewer_state().render_template(template_name, **context)


__all__ = [
    "PREPROCESSORS",
    "DocViewer",
    "Preprocessor",
    "ViewerState",
    "markup_to_html",
    "render_markup_template",
]
