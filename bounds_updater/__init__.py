# -*- coding: utf-8 -*-
"""
Bounds updater: keeps feature type and layer group bounds consistent with
committed data edits.

Public API:
    BoundsUpdateTransactionListener : transaction plugin (entry point)
    BoundsUpdaterSettings           : configuration
    SqliteCatalogRepository         : SQLite-backed catalog
    CatalogRepository               : catalog contract to implement elsewhere
"""

from .bounds_listener import BoundsUpdateTransactionListener, ListenerState
from .settings import BoundsUpdaterSettings, configure_logging
from .core.catalog import CatalogRepository, SqliteCatalogRepository, CloseableIterator

__all__ = [
    "BoundsUpdateTransactionListener",
    "ListenerState",
    "BoundsUpdaterSettings",
    "configure_logging",
    "CatalogRepository",
    "SqliteCatalogRepository",
    "CloseableIterator",
]
