"""Top-level package for URN Catalog Toolkit.

Generates an OASIS XML catalog from Magento's URN mapping and registers it
with the editor's XML extension. Front-ends (Tk dialogs, console) should only
depend on the public API exposed here.
"""

from .core.models import CatalogSettings, WorkspaceFolder  # re-export for convenience
from .core.services import CatalogCommand, build_catalog_command

__version__ = "1.0.0"

__all__: list[str] = [
    "CatalogCommand",
    "CatalogSettings",
    "WorkspaceFolder",
    "build_catalog_command",
]
