# -*- coding: utf-8 -*-
"""
Catalog repositories: the catalog contract used by the bounds updater, and
its SQLite implementation.

Higher layers (use cases, listener) only see CatalogRepository; they never
import CatalogManager directly.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod

from ..domain.errors import CatalogQueryError, CatalogSaveError
from ..domain.models import (
    FeatureType,
    Layer,
    LayerGroup,
    QualifiedName,
    ReferencedEnvelope,
)

logger = logging.getLogger(__name__)


class CloseableIterator:
    """Iterator over catalog results that holds an open resource.

    Usage:
        with catalog.list_layer_groups(group_filter) as groups:
            for group in groups:
                ...
    """

    def __init__(self, iterable, on_close=None):
        self._iterator = iter(iterable)
        self._on_close = on_close
        self._closed = False

    def __iter__(self):
        return self

    def __next__(self):
        if self._closed:
            raise StopIteration
        return next(self._iterator)

    def close(self):
        """Release the underlying resource. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        close_iterator = getattr(self._iterator, 'close', None)
        if close_iterator is not None:
            close_iterator()
        if self._on_close is not None:
            self._on_close()

    @property
    def closed(self):
        return self._closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # never suppress exceptions


class CatalogRepository(ABC):
    """Catalog operations the bounds updater depends on."""

    @abstractmethod
    def get_feature_type_by_name(self, name):
        """Return the FeatureType called ``name`` (QualifiedName), or None."""

    @abstractmethod
    def get_layers(self, feature_type):
        """Return the list of Layers backed by ``feature_type``."""

    @abstractmethod
    def list_layer_groups(self, group_filter):
        """Return a CloseableIterator over LayerGroups matching ``group_filter``."""

    @abstractmethod
    def save(self, entity):
        """Persist the bounds of a FeatureType or LayerGroup."""


class SqliteCatalogRepository(CatalogRepository):
    """CatalogRepository backed by a CatalogManager SQLite database.

    Usage (as context manager):
        with SqliteCatalogRepository(db_path) as catalog:
            listener = BoundsUpdateTransactionListener(catalog)
    """

    def __init__(self, db_path):
        self.db_path = db_path
        self._cm = None

    # ------------------------------------------------------------------ #
    #  Lifecycle
    # ------------------------------------------------------------------ #

    def open(self):
        """Open the SQLite connection."""
        from ...catalog_manager import CatalogManager
        self._cm = CatalogManager(self.db_path)
        self._cm.connect()

    def close(self):
        """Close the SQLite connection."""
        if self._cm:
            self._cm.disconnect()
            self._cm = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # never suppress exceptions

    # ------------------------------------------------------------------ #
    #  CatalogRepository
    # ------------------------------------------------------------------ #

    def get_feature_type_by_name(self, name):
        name = QualifiedName.parse(name)
        try:
            row = self._cm.get_feature_type(name.namespace, name.local_part)
        except sqlite3.Error as e:
            raise CatalogQueryError(f"Failed to look up feature type {name}: {e}") from e
        return self._row_to_feature_type(row) if row else None

    def get_layers(self, feature_type):
        try:
            rows = self._cm.get_layers_for_feature_type(feature_type.id)
        except sqlite3.Error as e:
            raise CatalogQueryError(
                f"Failed to load layers of {feature_type.prefixed_name}: {e}") from e
        return [
            Layer(id=r['id'], name=r['name'],
                  resource=QualifiedName(r['namespace'], r['local_name']))
            for r in rows
        ]

    def list_layer_groups(self, group_filter):
        try:
            cursor = self._cm.query_layer_groups(group_filter)
        except sqlite3.Error as e:
            raise CatalogQueryError(f"Failed to list layer groups: {e}") from e
        return CloseableIterator(self._iter_groups(cursor), on_close=cursor.close)

    def save(self, entity):
        try:
            if isinstance(entity, FeatureType):
                bounds = entity.native_bounding_box
                if bounds is None:
                    return
                self._cm.update_feature_type_bounds(
                    entity.id, self._envelope_values(bounds))
            elif isinstance(entity, LayerGroup):
                bounds = entity.bounds
                if bounds is None:
                    return
                self._cm.update_layer_group_bounds(
                    entity.id, bounds.crs, self._envelope_values(bounds))
            else:
                raise TypeError(f"Cannot save {type(entity).__name__} in the catalog")
        except sqlite3.Error as e:
            raise CatalogSaveError(f"Failed to save {entity.prefixed_name}: {e}") from e
        logger.debug("Saved bounds of %s", entity.prefixed_name)

    # ------------------------------------------------------------------ #
    #  Seeding helpers
    # ------------------------------------------------------------------ #

    def add_feature_type(self, name, native_crs, bounds=None):
        """Register a feature type. ``bounds`` is a ReferencedEnvelope or None.

        Returns:
            FeatureType: the persisted entity
        """
        name = QualifiedName.parse(name)
        values = self._envelope_values(bounds) if bounds else None
        feature_type_id = self._cm.insert_feature_type(
            name.namespace, name.local_part, native_crs, values)
        return FeatureType(name=name, native_crs=native_crs,
                           native_bounding_box=bounds, id=feature_type_id)

    def add_layer(self, name, feature_type, layer_id=None):
        """Publish ``feature_type`` as a layer. Returns the Layer."""
        layer_id = self._cm.insert_layer(name, feature_type.id, layer_id)
        return Layer(id=layer_id, name=name, resource=feature_type.name)

    def add_layer_group(self, name, members, bounds=None, root=None,
                        workspace='', group_id=None):
        """Register a layer group over ``members`` (Layers or LayerGroups).

        Returns:
            LayerGroup: the persisted entity
        """
        member_ids = [m.id for m in members]
        root_layer_id = root.id if root is not None else None
        group_id = self._cm.insert_layer_group(
            name, member_ids,
            crs=bounds.crs if bounds else None,
            bounds=self._envelope_values(bounds) if bounds else None,
            root_layer_id=root_layer_id,
            workspace=workspace,
            group_id=group_id,
        )
        return LayerGroup(id=group_id, name=name, bounds=bounds,
                          member_ids=member_ids, root_layer_id=root_layer_id,
                          workspace=workspace)

    # ------------------------------------------------------------------ #
    #  Row mapping
    # ------------------------------------------------------------------ #

    def _iter_groups(self, cursor):
        try:
            for row in cursor:
                yield self._row_to_layer_group(row)
        except sqlite3.Error as e:
            raise CatalogQueryError(f"Failed to read layer groups: {e}") from e

    def _row_to_layer_group(self, row):
        bounds = None
        if row['crs'] and row['min_x'] is not None:
            bounds = ReferencedEnvelope(row['min_x'], row['max_x'],
                                        row['min_y'], row['max_y'], row['crs'])
        return LayerGroup(
            id=row['id'],
            name=row['name'],
            bounds=bounds,
            member_ids=self._cm.get_group_member_ids(row['id']),
            root_layer_id=row['root_layer_id'],
            workspace=row['workspace'],
        )

    @staticmethod
    def _row_to_feature_type(row):
        bounds = None
        if row['min_x'] is not None:
            bounds = ReferencedEnvelope(row['min_x'], row['max_x'],
                                        row['min_y'], row['max_y'], row['native_crs'])
        return FeatureType(
            name=QualifiedName(row['namespace'], row['local_name']),
            native_crs=row['native_crs'],
            native_bounding_box=bounds,
            id=row['id'],
        )

    @staticmethod
    def _envelope_values(envelope):
        return (envelope.min_x, envelope.max_x, envelope.min_y, envelope.max_y)
