# src/tedit/core/__init__.py
"""Public facade for tedit.core: re-export the editor model from CamelCase modules.

`Tedit` itself is imported from `tedit.core.Tedit`; it depends on the ui and
integrations packages, which in turn import the model classes below.
"""

# Re-export classes/symbols from CamelCase modules
from .Cursor import Cursor  # noqa: F401
from .TextBuffer import TextBuffer  # noqa: F401
from .Viewport import ViewportScroller  # noqa: F401


__all__ = [
    "Cursor",
    "TextBuffer",
    "ViewportScroller",
]
