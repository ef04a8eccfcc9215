"""Shared fixtures for docviewer tests.

``docs_root`` writes a small documentation tree with modules under both the
root and its ``pods`` subdirectory. ``flask_app`` mounts the browser over that
tree with an allow-list limited to the ``Foo`` namespace, and ``client`` wraps
it in Flask's test client.
"""

from __future__ import annotations

import typing as typ

import pytest
from flask import Flask

from docviewer import DocViewer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from flask.testing import FlaskClient

FOO_BAR_DOC = """\
# NAME

Foo::Bar - does bar things

# SYNOPSIS

    use Foo::Bar;
    my $bar = Foo::Bar->new;

## Command line

    $ foo-bar --help

# SEE ALSO

[[Foo::Baz]], [[Other::Thing]] and [[Foo::Baz|the baz module]].
"""

FOO_BAZ_DOC = """\
# NAME

Foo::Baz - lives in the pods directory
"""


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Write a documentation tree and return its root directory."""
    root = tmp_path / "lib"
    (root / "Foo").mkdir(parents=True)
    (root / "Foo" / "Bar.md").write_text(FOO_BAR_DOC, encoding="utf-8")
    (root / "pods" / "Foo").mkdir(parents=True)
    (root / "pods" / "Foo" / "Baz.md").write_text(FOO_BAZ_DOC, encoding="utf-8")
    (root / "Other").mkdir()
    (root / "Other" / "Thing.md").write_text("# NAME\n\nOther\n", encoding="utf-8")
    return root


@pytest.fixture
def flask_app(docs_root: Path) -> Flask:
    """Return a Flask app with the documentation browser mounted."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    DocViewer(
        app,
        search_paths=[docs_root],
        allow_modules=[r"^Foo"],
        default_module="Foo::Bar",
    )
    return app


@pytest.fixture
def client(flask_app: Flask) -> FlaskClient:
    """Return a test client for ``flask_app``."""
    return flask_app.test_client()
