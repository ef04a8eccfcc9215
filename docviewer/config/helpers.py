"""Utility helpers shared by the docviewer configuration loader."""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path

from docviewer.modules import AllowList, InvalidModuleError, ModuleIdentifier

from .models import ViewerConfigError

OPTION_ALIASES: dict[str, str] = {
    "name": "handler_name",
    "no_perldoc": "disable_browser",
    "allow_modules": "allow_list",
}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _build_flag(value: object, name: str) -> bool:
    """Return ``value`` when it is a real boolean."""
    if not isinstance(value, bool):
        msg = f"Option '{name}' must be true or false, not {value!r}."
        raise ViewerConfigError(msg)
    return value


def _normalize_route(value: object) -> str:
    """Return ``value`` as a route prefix with one leading and no trailing slash."""
    text = _optional_str(value)
    if not text:
        msg = "Option 'route' must be a non-empty path."
        raise ViewerConfigError(msg)
    route = "/" + text.strip("/")
    return route if route != "/" else ""


def _build_module(value: object) -> ModuleIdentifier:
    """Parse a default module given in either ``::`` or ``/`` form."""
    if isinstance(value, ModuleIdentifier):
        return value
    try:
        return ModuleIdentifier.parse(str(value))
    except InvalidModuleError as exc:
        msg = f"Option 'default_module' is invalid: {exc}"
        raise ViewerConfigError(msg) from exc


def _build_allow_list(value: object) -> AllowList:
    """Compile allow-list patterns from a string, list, or AllowList."""
    match value:
        case AllowList():
            return value
        case None:
            return AllowList()
        case str() | re.Pattern():
            patterns: list[typ.Any] = [value]
        case list() | tuple():
            patterns = list(value)
        case _:
            msg = "Option 'allow_modules' must be a pattern or list of patterns."
            raise ViewerConfigError(msg)
    try:
        return AllowList.from_patterns(patterns)
    except re.error as exc:
        msg = f"Option 'allow_modules' holds an invalid pattern: {exc}"
        raise ViewerConfigError(msg) from exc


def _build_search_paths(value: object, base_dir: Path | None = None) -> list[Path]:
    """Return search roots as paths, resolving relative ones against ``base_dir``."""
    match value:
        case None:
            return []
        case str() | Path():
            raw: list[typ.Any] = [value]
        case list() | tuple():
            raw = list(value)
        case _:
            msg = "Option 'search_paths' must be a path or list of paths."
            raise ViewerConfigError(msg)
    paths: list[Path] = []
    for entry in raw:
        path = Path(entry).expanduser()
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        paths.append(path)
    return paths


def _canonical_options(payload: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Map option aliases onto their canonical field names."""
    options: dict[str, typ.Any] = {}
    for key, value in payload.items():
        options[OPTION_ALIASES.get(key, key)] = value
    return options


__all__ = [
    "OPTION_ALIASES",
    "_build_allow_list",
    "_build_flag",
    "_build_module",
    "_build_search_paths",
    "_canonical_options",
    "_normalize_route",
    "_optional_str",
]
