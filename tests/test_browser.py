"""Request-level tests for the documentation browser blueprint.

Requests go through Flask's test client against the ``flask_app`` fixture,
which serves the ``Foo`` namespace from a temporary documentation tree and
redirects everything else to the external documentation site.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from bs4 import BeautifulSoup
from flask import Flask

from docviewer import DocViewer
from docviewer._constants import EXTERNAL_DOC_BASE_URL

if typ.TYPE_CHECKING:
    from flask.testing import FlaskClient
    from pytest_mock import MockerFixture


def _documentation(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "html.parser")
    body = soup.select_one("div.documentation")
    assert body is not None, "expected the documentation container"
    return body


def test_page_renders_title_and_toc(client: FlaskClient) -> None:
    """Pages take their title from the NAME paragraph and list topics."""
    response = client.get("/perldoc/Foo/Bar")
    assert response.status_code == 200
    soup = BeautifulSoup(response.get_data(as_text=True), "html.parser")
    assert soup.title.get_text() == "Foo::Bar - does bar things"
    toc = soup.select_one("ul.toc")
    assert toc is not None, "expected a table of contents"
    top_level = [li.a.get_text() for li in toc.find_all("li", recursive=False)]
    assert top_level == ["NAME", "SYNOPSIS", "SEE ALSO"]
    nested = [a.get_text() for a in toc.select("li ul a")]
    assert nested == ["Command line"]


def test_page_rewrites_headings(client: FlaskClient) -> None:
    """Document headings link to themselves and back to the contents."""
    body = _documentation(client.get("/perldoc/Foo/Bar").get_data(as_text=True))
    heading = body.select_one("h1#synopsis")
    assert heading is not None, "expected the SYNOPSIS heading"
    assert [a["href"] for a in heading.find_all("a")] == ["#synopsis", "#toc"]


def test_page_rewrites_allowed_module_links(client: FlaskClient) -> None:
    """Links to permitted modules stay local; others point outward."""
    body = _documentation(client.get("/perldoc/Foo/Bar").get_data(as_text=True))
    hrefs = [a["href"] for a in body.select("p a")]
    assert hrefs == [
        "/perldoc/Foo/Baz",
        f"{EXTERNAL_DOC_BASE_URL}Other::Thing",
        "/perldoc/Foo/Baz",
    ]


def test_page_tags_code_blocks(client: FlaskClient) -> None:
    """Samples get the highlighting class, transcripts only a plain class."""
    body = _documentation(client.get("/perldoc/Foo/Bar").get_data(as_text=True))
    samples = body.select("pre > code.prettyprint")
    assert len(samples) == 1
    assert "use Foo::Bar;" in samples[0].get_text()
    transcripts = body.select("pre.sample > code")
    assert [code.get_text().strip() for code in transcripts] == ["$ foo-bar --help"]
    assert transcripts[0].get("class") is None


def test_page_links_source_and_external_views(client: FlaskClient) -> None:
    """The crumb bar links every namespace, the source, and the external page."""
    soup = BeautifulSoup(client.get("/perldoc/Foo/Bar").get_data(as_text=True), "html.parser")
    crumbs = soup.select_one("div.crumbs")
    assert crumbs is not None, "expected the crumb bar"
    hrefs = [a["href"] for a in crumbs.find_all("a")]
    assert hrefs == [
        "/perldoc/Foo",
        "/perldoc/Foo/Bar",
        "/perldoc/Foo/Bar.txt",
        f"{EXTERNAL_DOC_BASE_URL}Foo::Bar",
    ]


def test_root_serves_default_module(client: FlaskClient) -> None:
    """The browser root shows the configured default module."""
    response = client.get("/perldoc/")
    assert response.status_code == 200
    assert "Foo::Bar - does bar things" in response.get_data(as_text=True)


def test_pods_directory_module(client: FlaskClient) -> None:
    """Modules found under ``pods`` are served like any other."""
    response = client.get("/perldoc/Foo/Baz")
    assert response.status_code == 200
    assert "lives in the pods directory" in response.get_data(as_text=True)


def test_colon_form_in_url_is_accepted(client: FlaskClient) -> None:
    """Module names written with ``::`` in the URL resolve as well."""
    assert client.get("/perldoc/Foo::Bar").status_code == 200


def test_txt_suffix_returns_raw_source(client: FlaskClient, docs_root: Path) -> None:
    """A ``.txt`` suffix returns the unprocessed documentation source."""
    response = client.get("/perldoc/Foo/Bar.txt")
    assert response.status_code == 200
    assert response.mimetype == "text/plain"
    expected = (docs_root / "Foo" / "Bar.md").read_text(encoding="utf-8")
    assert response.get_data(as_text=True) == expected


def test_accept_header_negotiates_plain_text(client: FlaskClient) -> None:
    """Clients preferring text/plain receive the raw source."""
    response = client.get("/perldoc/Foo/Bar", headers={"Accept": "text/plain"})
    assert response.mimetype == "text/plain"
    assert response.get_data(as_text=True).startswith("# NAME")


def test_disallowed_module_redirects(client: FlaskClient) -> None:
    """Modules outside the allow-list redirect even when present on disk."""
    response = client.get("/perldoc/Other/Thing")
    assert response.status_code == 302
    assert response.location == f"{EXTERNAL_DOC_BASE_URL}Other::Thing"


def test_missing_module_redirects(client: FlaskClient) -> None:
    """Allowed modules without documentation redirect outward."""
    response = client.get("/perldoc/Foo/Missing")
    assert response.status_code == 302
    assert response.location == f"{EXTERNAL_DOC_BASE_URL}Foo::Missing"


def test_invalid_module_name_redirects(client: FlaskClient) -> None:
    """Names that are not module identifiers redirect outward."""
    response = client.get("/perldoc/Foo/Bar-Baz")
    assert response.status_code == 302
    assert response.location == f"{EXTERNAL_DOC_BASE_URL}Foo::Bar-Baz"


def test_unreadable_file_redirects(client: FlaskClient, mocker: MockerFixture) -> None:
    """Read failures are treated like missing documentation."""
    mocker.patch.object(Path, "read_text", side_effect=PermissionError("denied"))
    response = client.get("/perldoc/Foo/Bar")
    assert response.status_code == 302
    assert response.location == f"{EXTERNAL_DOC_BASE_URL}Foo::Bar"


def test_custom_route_and_layout(tmp_path: Path, docs_root: Path) -> None:
    """Applications can move the browser and supply their own layout."""
    templates = tmp_path / "templates" / "layouts"
    templates.mkdir(parents=True)
    (templates / "custom.html").write_text(
        '<main id="custom">{% block content %}{% endblock %}</main>\n',
        encoding="utf-8",
    )
    app = Flask(__name__, template_folder=str(tmp_path / "templates"))
    app.config["DOCVIEWER"] = {
        "route": "/manual",
        "layout": "custom",
        "search_paths": [str(docs_root)],
    }
    DocViewer(app)
    response = app.test_client().get("/manual/Foo/Bar")
    assert response.status_code == 200
    soup = BeautifulSoup(response.get_data(as_text=True), "html.parser")
    assert soup.select_one("main#custom div.documentation") is not None


def test_highlight_style_embeds_stylesheet(docs_root: Path) -> None:
    """Server-side highlighting adds Pygments CSS and token spans."""
    app = Flask(__name__)
    DocViewer(app, search_paths=[docs_root], highlight_style="monokai")
    html = app.test_client().get("/perldoc/Foo/Bar").get_data(as_text=True)
    soup = BeautifulSoup(html, "html.parser")
    assert ".prettyprint" in soup.style.get_text()
    assert soup.select("code.prettyprint span"), "expected highlighted tokens"
