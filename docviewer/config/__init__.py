"""Load and validate docviewer configuration.

Options can be supplied as keyword arguments to :class:`~docviewer.DocViewer`,
as a mapping under ``app.config["DOCVIEWER"]``, or as a YAML file read by
:func:`load_viewer_config`. All of them go through
:func:`build_viewer_config`, which applies defaults, accepts the historical
option aliases, and returns a :class:`ViewerConfig`.

Examples
--------
>>> from docviewer.config import build_viewer_config
>>> config = build_viewer_config({"allow_modules": ["^Foo"], "route": "docs"})
>>> config.route
'/docs'
>>> config.allow_list.permits("Foo::Bar")
True
"""

from .loader import build_viewer_config, load_viewer_config
from .models import ViewerConfig, ViewerConfigError

__all__ = [
    "ViewerConfig",
    "ViewerConfigError",
    "build_viewer_config",
    "load_viewer_config",
]
