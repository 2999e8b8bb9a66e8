"""NiceGUI pages for the WebCraft site.

Import this module to register all page routes with NiceGUI.
"""

from webcraft.pages import auth, dashboard, index

__all__ = ["auth", "dashboard", "index"]

# Touch modules to prevent linter from removing "unused" imports.
# These imports register @ui.page decorators as a side effect.
_PAGES = (auth, dashboard, index)
