"""Load docviewer configuration from mappings and YAML files."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_allow_list,
    _build_flag,
    _build_module,
    _build_search_paths,
    _canonical_options,
    _normalize_route,
    _optional_str,
)
from .models import ViewerConfig, ViewerConfigError

KNOWN_OPTIONS = frozenset(field.name for field in dc.fields(ViewerConfig))


def build_viewer_config(
    payload: typ.Mapping[str, typ.Any] | None = None,
    *,
    base_dir: Path | None = None,
) -> ViewerConfig:
    """Build a ViewerConfig from a mapping of options, applying defaults.

    Parameters
    ----------
    payload : Mapping[str, Any], optional
        Option values keyed by field name or by one of the historical aliases
        (``name``, ``no_perldoc``, ``allow_modules``).
    base_dir : Path, optional
        Directory against which relative ``search_paths`` are resolved.

    Returns
    -------
    ViewerConfig
        Fully populated configuration.

    Raises
    ------
    ViewerConfigError
        If an option is unknown or holds an invalid value.
    """
    options = _canonical_options(payload or {})
    unknown = sorted(set(options) - KNOWN_OPTIONS)
    if unknown:
        msg = f"Unknown docviewer option(s): {', '.join(unknown)}."
        raise ViewerConfigError(msg)

    base = ViewerConfig()
    handler_name = _optional_str(options.get("handler_name")) or base.handler_name
    layout = _optional_str(options.get("layout")) or base.layout
    preprocess = _optional_str(options.get("preprocess")) or base.preprocess
    external_base_url = (
        _optional_str(options.get("external_base_url")) or base.external_base_url
    )
    return ViewerConfig(
        handler_name=handler_name.lstrip("."),
        route=_normalize_route(options["route"]) if "route" in options else base.route,
        default_module=_build_module(options.get("default_module", base.default_module)),
        allow_list=_build_allow_list(options.get("allow_list")),
        layout=layout,
        disable_browser=_build_flag(
            options.get("disable_browser", base.disable_browser), "disable_browser"
        ),
        preprocess=preprocess,
        search_paths=_build_search_paths(options.get("search_paths"), base_dir),
        external_base_url=external_base_url,
        highlight_style=_optional_str(options.get("highlight_style")),
        highlight_lexer=_optional_str(options.get("highlight_lexer"))
        or base.highlight_lexer,
    )


def load_viewer_config(path: Path) -> ViewerConfig:
    """Load docviewer options from a YAML file.

    Relative ``search_paths`` are resolved against the file's directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    ViewerConfigError
        If the top-level YAML structure is not a mapping or an option is
        invalid.

    Examples
    --------
    >>> from pathlib import Path
    >>> config = load_viewer_config(Path("docviewer.yaml"))  # doctest: +SKIP
    >>> config.route  # doctest: +SKIP
    '/perldoc'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ViewerConfigError(msg)
    return build_viewer_config(loaded, base_dir=path.resolve().parent)


__all__ = ["KNOWN_OPTIONS", "build_viewer_config", "load_viewer_config"]
