# -*- coding: utf-8 -*-
"""
ContainmentResolver: finds every layer group that contains a feature type,
directly or through nested groups.

Algorithm:
  1. Load the layers backed by the feature type.
  2. Seed: groups having one of those layers as member or root layer.
  3. Expand: groups having a frontier group as member, until a pass finds
     no group that was not already seen.

Groups are deduplicated by id, so a cyclic membership graph still
terminates and no group is returned twice.
"""

import logging

from ..domain.errors import CatalogQueryError
from ..domain.models import MemberIn, contains_any

logger = logging.getLogger(__name__)


class ContainmentResolver:
    """Resolves the containment closure of a feature type.

    Args:
        catalog: CatalogRepository
    """

    def __init__(self, catalog):
        self._catalog = catalog

    def resolve_groups(self, feature_type):
        """Return every LayerGroup containing ``feature_type``.

        Catalog query failures are logged and end the affected branch; the
        groups found before the failure are still returned.

        Args:
            feature_type: FeatureType

        Returns:
            list[LayerGroup]: deduplicated, in discovery order
        """
        try:
            layers = self._catalog.get_layers(feature_type)
        except CatalogQueryError:
            logger.error("Failed to load layers of feature type %s",
                         feature_type.prefixed_name, exc_info=True)
            return []

        layer_ids = [layer.id for layer in layers]
        if not layer_ids:
            return []

        found = {}
        try:
            frontier = self._collect_new(contains_any(layer_ids), found)
        except CatalogQueryError:
            logger.error("Failed to load groups associated with feature type %s",
                         feature_type.prefixed_name, exc_info=True)
            return list(found.values())

        self._expand_parents(frontier, found)
        return list(found.values())

    # ------------------------------------------------------------------ #
    #  Private helpers
    # ------------------------------------------------------------------ #

    def _expand_parents(self, frontier, found):
        """Add the ancestors of ``frontier`` to ``found`` until a fixed point."""
        while frontier:
            try:
                frontier = self._collect_new(MemberIn(frontier), found)
            except CatalogQueryError:
                logger.error("Failed to recursively load parent groups of %s",
                             sorted(frontier), exc_info=True)
                return

    def _collect_new(self, group_filter, found):
        """Query groups matching ``group_filter`` and keep the unseen ones.

        Returns:
            list[str]: ids of the groups added to ``found`` by this query
        """
        new_ids = []
        with self._catalog.list_layer_groups(group_filter) as groups:
            for group in groups:
                if group.id in found:
                    continue
                found[group.id] = group
                new_ids.append(group.id)
        return new_ids
