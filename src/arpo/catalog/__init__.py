"""Catalog of archivable project directories."""

from .catalog import Catalog, Entry, ProjectCatalog

__all__ = [
    "Catalog",
    "Entry",
    "ProjectCatalog",
]
