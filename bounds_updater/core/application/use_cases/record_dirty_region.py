# -*- coding: utf-8 -*-
"""
RecordDirtyRegion: use case that remembers the area touched by one edit.

Business rules:
  - Only insert and update elements can grow bounds.
  - POST_INSERT carries the same bounds as PRE_INSERT: skipped.
  - Changes to feature types unknown to the catalog are skipped.
  - An empty affected feature set records nothing.

Returns:
  - bool: True when an envelope was recorded on the transaction.
"""

import logging

from ...domain.models import QualifiedName, TransactionEventType
from .. import dirty_regions
from .commands import RecordChangeCommand

logger = logging.getLogger(__name__)


class RecordDirtyRegion:
    """Use case: record the dirty region of a data-store change.

    Args:
        catalog: CatalogRepository: used to check the feature type exists.
    """

    def __init__(self, catalog):
        if catalog is None:
            raise RuntimeError("RecordDirtyRegion requires a catalog instance.")
        self._catalog = catalog

    def execute(self, cmd: RecordChangeCommand) -> bool:
        event = cmd.event
        if not event.source.may_grow_bounds:
            return False
        if event.type == TransactionEventType.POST_INSERT:
            return False

        name = QualifiedName.parse(event.layer_name)
        feature_type = self._catalog.get_feature_type_by_name(name)
        if feature_type is None:
            logger.debug("Ignoring change to %s: not a catalog feature type", name)
            return False

        affected_bounds = event.affected_features.get_bounds()
        if affected_bounds is None:
            return False

        dirty_regions.record_envelope(event.request, name, affected_bounds)
        logger.debug("Recorded dirty region %s for %s", affected_bounds, name)
        return True
