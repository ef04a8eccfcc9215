"""Find documentation source files for module identifiers."""

from __future__ import annotations

import logging
import os
import typing as typ
from pathlib import Path

from ._constants import DOC_EXTENSIONS

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .modules import ModuleIdentifier

logger = logging.getLogger(__name__)


class ModuleLocator:
    """Search an ordered list of directories for a module's documentation.

    For each configured root, both the root itself and its ``pods``
    subdirectory are searched, so ``Foo::Bar`` resolves to the first readable
    ``<root>/Foo/Bar.md`` (or another configured extension) in search order.
    """

    def __init__(
        self,
        search_paths: cabc.Iterable[Path | str],
        *,
        extensions: cabc.Sequence[str] = DOC_EXTENSIONS,
    ) -> None:
        self.search_paths = [Path(path) for path in search_paths]
        self.extensions = tuple(extensions)

    def candidates(self, module: ModuleIdentifier) -> list[Path]:
        """Return every path that could hold ``module``, in search order."""
        relative = Path(*module.segments)
        paths: list[Path] = []
        for root in self.search_paths:
            for directory in (root, root / "pods"):
                paths.extend(
                    directory / relative.with_suffix(ext) for ext in self.extensions
                )
        return paths

    def find(self, module: ModuleIdentifier) -> Path | None:
        """Return the first readable documentation file for ``module``."""
        for path in self.candidates(module):
            if path.is_file() and os.access(path, os.R_OK):
                logger.debug("Resolved %s to %s", module, path)
                return path
        return None


__all__ = ["ModuleLocator"]
