# -*- coding: utf-8 -*-
"""
Domain errors raised by the bounds updater.

A lookup miss (unknown feature type, unknown group) is not an error: catalog
lookups return None and callers skip the entity.
"""


class BoundsUpdateError(Exception):
    """Base class for all bounds updater errors."""


class ReprojectionError(BoundsUpdateError):
    """An envelope could not be transformed into the requested CRS."""

    def __init__(self, message, source_crs=None, target_crs=None):
        super().__init__(message)
        self.source_crs = source_crs
        self.target_crs = target_crs


class CatalogError(BoundsUpdateError):
    """Base class for failures reported by the catalog store."""


class CatalogQueryError(CatalogError):
    """A catalog lookup or listing failed."""


class CatalogSaveError(CatalogError):
    """A catalog entity could not be saved."""
