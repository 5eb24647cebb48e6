"""Catalog metadata providers."""

from catalog_proxy.providers.catalog.tmdb_provider import TMDBCatalogProvider

__all__ = ["TMDBCatalogProvider"]
