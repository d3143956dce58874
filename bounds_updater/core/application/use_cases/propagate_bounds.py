# -*- coding: utf-8 -*-
"""
PropagateBounds: use case that applies a committed transaction's dirty
regions to the stored bounds of feature types and layer groups.

Steps, per dirty feature type:
  1. Merge its dirty regions into the CRS of its stored bounds.
  2. Expand and save the feature type bounds.
  3. Resolve every layer group containing it (directly or nested).
  4. Reproject the merged region into each group's CRS, expand and save.

Failures are local: a feature type that cannot be merged or saved is
skipped, a group that cannot be reprojected or saved is skipped, and the
remaining work proceeds. Bounds only ever grow.

Returns:
  - dict: {
        'feature_types': list[str] : prefixed names of updated feature types,
        'layer_groups':  list[str] : ids of updated layer groups,
        'errors':        list[str] : one message per skipped unit,
    }
"""

import logging

from ...domain.errors import CatalogError, ReprojectionError
from ..containment import ContainmentResolver
from .. import dirty_regions
from .commands import PropagateBoundsCommand

logger = logging.getLogger(__name__)


class PropagateBounds:
    """Use case: propagate dirty regions after a commit.

    Args:
        catalog: CatalogRepository
        resolver: ContainmentResolver (defaults to one over ``catalog``)
    """

    def __init__(self, catalog, resolver=None):
        if catalog is None:
            raise RuntimeError("PropagateBounds requires a catalog instance.")
        self._catalog = catalog
        self._resolver = resolver or ContainmentResolver(catalog)

    def execute(self, cmd: PropagateBoundsCommand) -> dict:
        report = {'feature_types': [], 'layer_groups': [], 'errors': []}

        by_layer = dirty_regions.all_dirty_regions(cmd.request)
        if not by_layer:
            return report

        logger.debug("Detected change to data, updating bounds of %d feature type(s)",
                     len(by_layer))
        for name, regions in by_layer.items():
            if not regions:
                continue
            try:
                self._propagate_feature_type(cmd, name, regions, report)
            except (ReprojectionError, CatalogError) as e:
                logger.warning("Could not update bounds of %s: %s", name, e)
                report['errors'].append(f"{name}: {e}")
        return report

    # ------------------------------------------------------------------ #
    #  Private helpers
    # ------------------------------------------------------------------ #

    def _propagate_feature_type(self, cmd, name, regions, report):
        from ....geometry_utils import merge_all

        feature_type = self._catalog.get_feature_type_by_name(name)
        if feature_type is None:
            logger.debug("Feature type %s disappeared before commit", name)
            return

        dirty_region = merge_all(
            regions,
            target_crs=feature_type.bounds_crs,
            lenient=cmd.lenient,
            max_points_to_project=cmd.max_points_to_project,
        )
        if dirty_region is None:
            return

        logger.debug("Updating bounds of %s in response to data change",
                     feature_type.prefixed_name)
        feature_type.expand_bounds(dirty_region)
        self._catalog.save(feature_type)
        report['feature_types'].append(feature_type.prefixed_name)

        for group in self._resolver.resolve_groups(feature_type):
            self._update_layer_group(cmd, group, dirty_region, report)

    def _update_layer_group(self, cmd, group, dirty_region, report):
        from ....geometry_utils import reproject

        logger.debug("Updating bounds of layer group %s in response to data change",
                     group.prefixed_name)
        try:
            if group.bounds is not None:
                dirty_region = reproject(
                    dirty_region, group.bounds.crs,
                    lenient=cmd.lenient,
                    max_points_to_project=cmd.max_points_to_project,
                )
            group.expand_bounds(dirty_region)
            self._catalog.save(group)
        except (ReprojectionError, CatalogError) as e:
            logger.warning("Could not update bounds of layer group %s: %s",
                           group.prefixed_name, e)
            report['errors'].append(f"{group.prefixed_name}: {e}")
            return
        report['layer_groups'].append(group.id)
