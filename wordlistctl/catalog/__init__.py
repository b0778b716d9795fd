"""Catalog collaborator: loading and refreshing archive.json."""

from wordlistctl.catalog.loader import load_catalog, parse_catalog, update_catalog

__all__ = ["load_catalog", "parse_catalog", "update_catalog"]
