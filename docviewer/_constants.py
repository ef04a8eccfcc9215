"""Common literal values used across docviewer.

These constants keep option defaults and URL prefixes centralized so the
configuration loader, the Flask extension, the CLI, and tests can import the
same values without drifting. Intended for internal use within the docviewer
package.

Examples
--------
>>> from docviewer import _constants
>>> _constants.EXTERNAL_DOC_BASE_URL + "Foo::Bar"
'https://metacpan.org/pod/Foo::Bar'
>>> _constants.DEFAULT_ROUTE
'/perldoc'
"""

EXTERNAL_DOC_BASE_URL = "https://metacpan.org/pod/"
DEFAULT_HANDLER_NAME = "md"
DEFAULT_ROUTE = "/perldoc"
DEFAULT_MODULE = "Guides"
DEFAULT_LAYOUT = "docviewer"
DEFAULT_PREPROCESSOR = "jinja"
DEFAULT_TITLE = "Documentation"
DEFAULT_HIGHLIGHT_LEXER = "perl"
DOC_EXTENSIONS = (".md", ".markdown")
EXTENSION_KEY = "docviewer"
ENDPOINT = "docviewer.page"
