"""Cyclopts CLI entrypoint for browsing and rendering module documentation.

The ``docviewer`` console script wraps a small Flask application with the
:class:`~docviewer.DocViewer` extension mounted. ``docviewer serve`` runs the
documentation browser on a development server, ``docviewer render`` prints the
rendered page for one module, and ``docviewer locate`` shows which file a
module resolves to.

Examples
--------
Serve documentation from a local tree:

>>> from docviewer.cli import app
>>> app.run(["serve", "--search-path", "docs"])  # doctest: +SKIP

Print the raw source of a module:

>>> app.run(["render", "Foo::Bar", "--search-path", "docs", "--source"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from flask import Flask

from .config import ViewerConfig, build_viewer_config, load_viewer_config
from .locator import ModuleLocator
from .modules import InvalidModuleError, ModuleIdentifier
from .plugin import DocViewer

app = App(name="docviewer", config=cyclopts.config.Env("DOCVIEWER_", command=False))  # type: ignore[unknown-argument]


def _load_config(
    config: Path | None,
    search_paths: list[Path] | None,
    allow: list[str] | None,
) -> ViewerConfig:
    """Merge the optional YAML config with command-line overrides."""
    base = load_viewer_config(config) if config else ViewerConfig()
    overrides: dict[str, typ.Any] = {
        "handler_name": base.handler_name,
        "route": base.route or "/",
        "default_module": base.default_module,
        "allow_modules": base.allow_list,
        "layout": base.layout,
        "preprocess": base.preprocess,
        "search_paths": [*base.search_paths, *(search_paths or [])],
        "external_base_url": base.external_base_url,
        "highlight_style": base.highlight_style,
        "highlight_lexer": base.highlight_lexer,
    }
    if allow:
        overrides["allow_modules"] = allow
    return build_viewer_config(overrides)


def create_app(config: ViewerConfig) -> Flask:
    """Return a Flask application with the documentation browser mounted."""
    flask_app = Flask(__name__)
    DocViewer(flask_app, config)
    return flask_app


def _parse_module(name: str) -> ModuleIdentifier:
    try:
        return ModuleIdentifier.parse(name)
    except InvalidModuleError as exc:
        raise ValueError(str(exc)) from exc


ConfigOption = typ.Annotated[
    Path | None, Parameter(help="Path to a docviewer YAML config", env_var="DOCVIEWER_CONFIG")
]
SearchPathOption = typ.Annotated[
    list[Path] | None,
    Parameter(help="Directory searched for documentation (repeatable)"),
]
AllowOption = typ.Annotated[
    list[str] | None,
    Parameter(help="Regular expression of modules served locally (repeatable)"),
]


@app.command(help="Run the documentation browser on a development server.")
def serve(
    *,
    config: ConfigOption = None,
    search_path: SearchPathOption = None,
    allow: AllowOption = None,
    host: typ.Annotated[str, Parameter(help="Interface to bind")] = "127.0.0.1",
    port: typ.Annotated[int, Parameter(help="Port to listen on")] = 3000,
    debug: bool = False,
) -> None:
    """Serve the documentation browser until interrupted.

    Parameters
    ----------
    config : Path or None, optional
        YAML configuration file; command-line options extend it.
    search_path : list[Path] or None, optional
        Extra directories searched for documentation files.
    allow : list[str] or None, optional
        Allow-list patterns replacing the configured ones.
    host : str, optional
        Interface for the development server.
    port : int, optional
        Port for the development server.
    debug : bool, optional
        Enable Flask's debugger and reloader.
    """
    viewer_config = _load_config(config, search_path, allow)
    flask_app = create_app(viewer_config)
    print(f"serving documentation at http://{host}:{port}{viewer_config.route}/")
    flask_app.run(host=host, port=port, debug=debug)


@app.command(help="Print the rendered documentation page for a module.")
def render(
    module: str,
    /,
    *,
    config: ConfigOption = None,
    search_path: SearchPathOption = None,
    allow: AllowOption = None,
    source: typ.Annotated[bool, Parameter(help="Print the raw source instead")] = False,
) -> None:
    """Render ``module`` through the browser and print the response body.

    Raises
    ------
    ValueError
        If ``module`` is not a valid module name.
    LookupError
        If the module is not served locally (the browser would redirect).
    """
    identifier = _parse_module(module)
    viewer_config = _load_config(config, search_path, allow)
    flask_app = create_app(viewer_config)
    suffix = ".txt" if source else ".html"
    url = f"{viewer_config.route}/{identifier.path}{suffix}"
    response = flask_app.test_client().get(url)
    if response.status_code != 200:
        msg = f"{identifier} is not served locally (see {response.location})."
        raise LookupError(msg)
    print(response.get_data(as_text=True))


@app.command(help="Print the documentation file a module resolves to.")
def locate(
    module: str,
    /,
    *,
    config: ConfigOption = None,
    search_path: SearchPathOption = None,
) -> None:
    """Print the first matching documentation file for ``module``.

    Raises
    ------
    FileNotFoundError
        If no search path holds documentation for ``module``.
    """
    identifier = _parse_module(module)
    viewer_config = _load_config(config, search_path, None)
    path = ModuleLocator(viewer_config.search_paths).find(identifier)
    if path is None:
        msg = f"No documentation found for {identifier}."
        raise FileNotFoundError(msg)
    print(path)


def main() -> None:
    """Invoke the Cyclopts application that powers the `docviewer` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
