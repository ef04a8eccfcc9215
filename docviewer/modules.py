r"""Namespaced module identifiers and the allow-list that gates them.

Documentation units are addressed by namespaced names such as ``Foo::Bar``.
The browser exposes them in URLs as ``Foo/Bar`` and looks them up on disk by
the same segments, so :class:`ModuleIdentifier` keeps the segments and renders
either form on demand. :class:`AllowList` decides which identifiers are served
locally, and :func:`parse_module_reference` pulls an identifier out of a link
that points at the external documentation site.

Example
-------
>>> from docviewer.modules import AllowList, ModuleIdentifier
>>> module = ModuleIdentifier.from_path("Foo/Bar")
>>> module.canonical
'Foo::Bar'
>>> AllowList.from_patterns([r"^Foo"]).permits(module)
True
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

SEGMENT_PATTERN = re.compile(r"^\w+$")
SEPARATOR_PATTERN = re.compile(r"::|/")
REFERENCE_PATTERN = re.compile(r"[\w:/]+")


class InvalidModuleError(ValueError):
    """Raised when text cannot be read as a module identifier."""


@dc.dataclass(frozen=True, slots=True)
class ModuleIdentifier:
    """Segments of a namespaced documentation module name.

    Attributes
    ----------
    segments : tuple[str, ...]
        Name parts in order, e.g. ``("Foo", "Bar")`` for ``Foo::Bar``.
    """

    segments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            msg = "Module identifier needs at least one segment."
            raise InvalidModuleError(msg)
        for segment in self.segments:
            if not SEGMENT_PATTERN.match(segment):
                msg = f"Invalid module segment {segment!r}."
                raise InvalidModuleError(msg)

    @classmethod
    def from_path(cls, path: str) -> ModuleIdentifier:
        """Build an identifier from its slash-joined URL form."""
        return cls(tuple(path.strip("/").split("/")))

    @classmethod
    def from_canonical(cls, name: str) -> ModuleIdentifier:
        """Build an identifier from its ``::``-joined form."""
        return cls(tuple(name.split("::")))

    @classmethod
    def parse(cls, text: str) -> ModuleIdentifier:
        """Build an identifier from text using either separator."""
        return cls(tuple(SEPARATOR_PATTERN.split(text.strip("/"))))

    @property
    def path(self) -> str:
        """Return the slash-joined form used in URLs."""
        return "/".join(self.segments)

    @property
    def canonical(self) -> str:
        """Return the ``::``-joined form used for lookup and display."""
        return "::".join(self.segments)

    @property
    def parents(self) -> list[ModuleIdentifier]:
        """Return every leading namespace, shortest first, ending with ``self``."""
        return [
            ModuleIdentifier(self.segments[: idx + 1])
            for idx in range(len(self.segments))
        ]

    def __str__(self) -> str:
        return self.canonical


@dc.dataclass(frozen=True, slots=True)
class AllowList:
    """Ordered regular expressions deciding which modules are served locally."""

    patterns: tuple[re.Pattern[str], ...] = (re.compile(""),)

    @classmethod
    def from_patterns(
        cls, patterns: cabc.Iterable[str | re.Pattern[str]] | None
    ) -> AllowList:
        """Compile ``patterns`` into an allow-list; ``None`` allows everything.

        Raises
        ------
        re.error
            If a string pattern is not a valid regular expression.
        """
        if patterns is None:
            return cls()
        compiled = tuple(
            pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
            for pattern in patterns
        )
        return cls(compiled)

    def permits(self, module: ModuleIdentifier | str) -> bool:
        """Return ``True`` when any pattern matches the canonical name."""
        name = module.canonical if isinstance(module, ModuleIdentifier) else module
        return any(pattern.search(name) for pattern in self.patterns)


def parse_module_reference(
    href: str, base_url: str
) -> tuple[ModuleIdentifier, str] | None:
    """Split a link to the external documentation site into module and rest.

    The grammar is the literal ``base_url`` followed by one or more characters
    from ``[\\w:/]``; the run of those characters names the module in either
    ``Foo::Bar`` or ``Foo/Bar`` form. Whatever follows (a fragment, a query)
    is returned untouched.

    Parameters
    ----------
    href : str
        Link target to inspect.
    base_url : str
        Prefix of the external documentation site.

    Returns
    -------
    tuple[ModuleIdentifier, str] | None
        The identifier and the remainder of ``href``, or ``None`` when the
        link does not point at a module on the external site.

    Examples
    --------
    >>> parse_module_reference(
    ...     "https://metacpan.org/pod/Foo::Bar#SYNOPSIS", "https://metacpan.org/pod/"
    ... )
    (ModuleIdentifier(segments=('Foo', 'Bar')), '#SYNOPSIS')
    """
    if not base_url or not href.startswith(base_url):
        return None
    match = REFERENCE_PATTERN.match(href, len(base_url))
    if match is None:
        return None
    try:
        module = ModuleIdentifier.parse(match.group(0))
    except InvalidModuleError:
        return None
    return module, href[match.end() :]


__all__ = [
    "AllowList",
    "InvalidModuleError",
    "ModuleIdentifier",
    "parse_module_reference",
]
