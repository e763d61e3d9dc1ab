"""Registry for ISO question catalogs."""

from isoaudit.registry.catalog_registry import (
    CatalogRegistry,
    get_catalog_registry,
)

__all__ = [
    "CatalogRegistry",
    "get_catalog_registry",
]
