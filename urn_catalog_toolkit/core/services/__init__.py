"""High-level orchestration services."""

from .catalog_service import CatalogCommand, build_catalog_command  # noqa: F401

__all__: list[str] = [
    "CatalogCommand",
    "build_catalog_command",
]
