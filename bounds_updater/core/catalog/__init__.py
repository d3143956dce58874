# -*- coding: utf-8 -*-
"""
Catalog package: the catalog contract and its SQLite implementation.

Public API:
    CatalogRepository       : abstract catalog used by the bounds updater
    SqliteCatalogRepository : CatalogRepository over a SQLite file (context manager)
    CloseableIterator       : iterator that releases its cursor on close
"""

from .repository import CatalogRepository, SqliteCatalogRepository, CloseableIterator

__all__ = ["CatalogRepository", "SqliteCatalogRepository", "CloseableIterator"]
