# -*- coding: utf-8 -*-
"""
ReferencedEnvelope: axis-aligned bounding box tagged with a CRS.

No pyproj dependency. CRS handling (reprojection, horizontal CRS lookup)
lives in bounds_updater.geometry_utils.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class ReferencedEnvelope:
    """Immutable rectangle (optionally with a vertical range) in a given CRS.

    Argument order follows the (x1, x2, y1, y2) convention used by catalog
    bounding boxes: ``ReferencedEnvelope(-90, 0, 0, 45, "EPSG:4326")`` spans
    x from -90 to 0 and y from 0 to 45.

    Attributes:
        min_x, max_x: Horizontal range along the first axis.
        min_y, max_y: Horizontal range along the second axis.
        crs:          Any CRS identifier pyproj accepts (e.g. "EPSG:4326").
        min_z, max_z: Vertical range: both set for 3-D envelopes, both None
                      otherwise.
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    crs: str
    min_z: Optional[float] = None
    max_z: Optional[float] = None

    def __post_init__(self):
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Envelope minimum exceeds maximum: "
                f"x=[{self.min_x}, {self.max_x}] y=[{self.min_y}, {self.max_y}]"
            )
        if (self.min_z is None) != (self.max_z is None):
            raise ValueError("Envelope needs both min_z and max_z, or neither.")
        if self.min_z is not None and self.min_z > self.max_z:
            raise ValueError(
                f"Envelope minimum exceeds maximum: z=[{self.min_z}, {self.max_z}]"
            )
        if not self.crs:
            raise ValueError("Envelope requires a CRS.")

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def is_3d(self) -> bool:
        """True when the envelope carries a vertical range."""
        return self.min_z is not None

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    # ------------------------------------------------------------------ #
    #  Operations (always return new envelopes)
    # ------------------------------------------------------------------ #

    def expand_to_include(self, other: 'ReferencedEnvelope') -> 'ReferencedEnvelope':
        """Return the smallest envelope enclosing both ``self`` and ``other``.

        The result keeps the CRS of ``self``; callers reproject ``other``
        beforehand. The vertical range is kept only when both are 3-D.
        """
        min_z = max_z = None
        if self.is_3d and other.is_3d:
            min_z = min(self.min_z, other.min_z)
            max_z = max(self.max_z, other.max_z)
        return ReferencedEnvelope(
            min(self.min_x, other.min_x),
            max(self.max_x, other.max_x),
            min(self.min_y, other.min_y),
            max(self.max_y, other.max_y),
            self.crs,
            min_z,
            max_z,
        )

    def contains(self, other: 'ReferencedEnvelope') -> bool:
        """True when the horizontal rectangle of ``other`` lies inside ``self``."""
        return (self.min_x <= other.min_x and other.max_x <= self.max_x
                and self.min_y <= other.min_y and other.max_y <= self.max_y)

    def to_2d(self, crs: Optional[str] = None) -> 'ReferencedEnvelope':
        """Drop the vertical range, optionally retagging with ``crs``."""
        return replace(self, crs=crs or self.crs, min_z=None, max_z=None)

    def with_crs(self, crs: str) -> 'ReferencedEnvelope':
        """Same coordinates, different CRS tag."""
        return replace(self, crs=crs)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)``: the order pyproj expects."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def __str__(self) -> str:
        return (
            f"ReferencedEnvelope[{self.min_x} : {self.max_x}, "
            f"{self.min_y} : {self.max_y}] {self.crs}"
        )
