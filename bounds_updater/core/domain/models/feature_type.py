# -*- coding: utf-8 -*-
"""
FeatureType: a named collection of spatial features with stored bounds.

Holds metadata only. No pyproj dependency. No database access.
"""

from dataclasses import dataclass
from typing import Optional

from .envelope import ReferencedEnvelope
from .qualified_name import QualifiedName


@dataclass
class FeatureType:
    """Catalog entity: a feature type (collection) and its native bounding box.

    Attributes:
        name:                Qualified name, unique in the catalog.
        native_crs:          CRS the data is stored in. Used as merge target
                             while no bounding box has been computed yet.
        native_bounding_box: Stored extent in ``native_crs`` (None = never
                             computed).
        id:                  Catalog primary key (None until persisted).
    """

    name: QualifiedName
    native_crs: str
    native_bounding_box: Optional[ReferencedEnvelope] = None
    id: Optional[str] = None

    @property
    def prefixed_name(self) -> str:
        return str(self.name)

    @property
    def bounds_crs(self) -> str:
        """CRS incoming dirty regions are merged into."""
        if self.native_bounding_box is not None:
            return self.native_bounding_box.crs
        return self.native_crs

    def expand_bounds(self, dirty_region: ReferencedEnvelope) -> ReferencedEnvelope:
        """Grow the native bounding box to include ``dirty_region``.

        ``dirty_region`` must already be expressed in ``bounds_crs``.

        Returns:
            ReferencedEnvelope: the new bounding box (also stored on self).
        """
        if self.native_bounding_box is None:
            self.native_bounding_box = dirty_region.to_2d(self.native_crs)
        else:
            self.native_bounding_box = self.native_bounding_box.expand_to_include(
                dirty_region)
        return self.native_bounding_box
