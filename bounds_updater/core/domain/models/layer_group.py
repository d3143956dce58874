# -*- coding: utf-8 -*-
"""
LayerGroup: aggregation of layers and nested layer groups with stored bounds.

No pyproj dependency. No database access.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .envelope import ReferencedEnvelope


@dataclass
class LayerGroup:
    """Catalog entity: a layer group.

    Groups form a directed containment graph (group → member). Members are
    referenced by id and may be layers or other groups.

    Attributes:
        id:            Opaque catalog identifier.
        name:          Group name.
        bounds:        Stored extent, in the group's own CRS (None = never
                       computed).
        member_ids:    Ids of the direct members, in drawing order.
        root_layer_id: Id of the designated root layer (optional).
        workspace:     Workspace the group belongs to ('' = global).
    """

    id: str
    name: str
    bounds: Optional[ReferencedEnvelope] = None
    member_ids: List[str] = field(default_factory=list)
    root_layer_id: Optional[str] = None
    workspace: str = ''

    @property
    def prefixed_name(self) -> str:
        if not self.workspace:
            return self.name
        return f"{self.workspace}:{self.name}"

    def contains_member(self, member_id: str) -> bool:
        """True when ``member_id`` is a direct member or the root layer."""
        return member_id in self.member_ids or member_id == self.root_layer_id

    def expand_bounds(self, dirty_region: ReferencedEnvelope) -> ReferencedEnvelope:
        """Grow the group bounds to include ``dirty_region``.

        ``dirty_region`` must already be expressed in the group's CRS (or in
        any CRS when the group has no bounds yet).
        """
        if self.bounds is None:
            self.bounds = dirty_region.to_2d()
        else:
            self.bounds = self.bounds.expand_to_include(dirty_region)
        return self.bounds
