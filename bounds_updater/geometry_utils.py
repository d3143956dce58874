# -*- coding: utf-8 -*-
"""
Geometry Utilities Module
Shared helper functions for CRS normalization, envelope reprojection
and dirty region merging.
"""

import logging
import math
from functools import lru_cache

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from .core.domain.errors import ReprojectionError
from .core.domain.models import ReferencedEnvelope

logger = logging.getLogger(__name__)

DEFAULT_MAX_POINTS_TO_PROJECT = 1000


@lru_cache(maxsize=64)
def _crs(crs_input):
    try:
        return CRS.from_user_input(crs_input)
    except CRSError as e:
        raise ReprojectionError(f"Unknown CRS {crs_input!r}: {e}",
                                source_crs=crs_input) from e


@lru_cache(maxsize=64)
def _transformer(source_crs, target_crs, lenient):
    return Transformer.from_crs(
        _crs(source_crs), _crs(target_crs),
        always_xy=True,
        allow_ballpark=lenient,
    )


def _crs_to_string(crs):
    """Prefer an ``AUTH:CODE`` identifier, fall back to WKT."""
    authority = crs.to_authority()
    if authority:
        return ":".join(authority)
    return crs.to_wkt()


def same_crs(crs_a, crs_b):
    """True when two CRS identifiers describe the same CRS.

    Axis order is ignored because transforms always run in x/y order.
    """
    if crs_a == crs_b:
        return True
    return _crs(crs_a).equals(_crs(crs_b), ignore_axis_order=True)


def horizontal_crs(crs_input):
    """Return the 2-D horizontal component of a CRS identifier.

    Args:
        crs_input: str: compound, 3-D or 2-D CRS identifier

    Returns:
        str: identifier of the horizontal CRS (``crs_input`` itself when
             already 2-D)
    """
    crs = _crs(crs_input)
    if crs.is_compound:
        for sub_crs in crs.sub_crs_list:
            if not sub_crs.is_vertical:
                return _crs_to_string(sub_crs)
        raise ReprojectionError(
            f"Compound CRS {crs_input!r} has no horizontal component",
            source_crs=crs_input,
        )
    if len(crs.axis_info) > 2:
        return _crs_to_string(crs.to_2d())
    return crs_input


def normalize(envelope):
    """Collapse a 3-D envelope to 2-D in its horizontal CRS.

    Args:
        envelope: ReferencedEnvelope

    Returns:
        ReferencedEnvelope: 2-D envelope (the input itself when already 2-D
                            in a 2-D CRS)
    """
    target = horizontal_crs(envelope.crs)
    if not envelope.is_3d and target == envelope.crs:
        return envelope
    return envelope.to_2d(target)


def reproject(envelope, target_crs, lenient=True,
              max_points_to_project=DEFAULT_MAX_POINTS_TO_PROJECT):
    """Transform an envelope into ``target_crs``.

    The envelope edges are densified so that curved edges in the target CRS
    are still enclosed; ``max_points_to_project`` caps the number of points
    sampled along the whole outline. A result that wraps around the
    antimeridian of a geographic target spans the full longitude range.

    Args:
        envelope:              ReferencedEnvelope (2-D)
        target_crs:            str: CRS identifier
        lenient:               bool: allow ballpark (datum-less) transforms
        max_points_to_project: int: point budget for the outline

    Returns:
        ReferencedEnvelope: envelope tagged with ``target_crs``

    Raises:
        ReprojectionError: no transform path, the transform diverged, or the
            result wraps around the antimeridian of a projected target.
    """
    if same_crs(envelope.crs, target_crs):
        return envelope.with_crs(target_crs)

    densify_pts = max(0, (int(max_points_to_project) - 4) // 4)
    try:
        transformer = _transformer(envelope.crs, target_crs, bool(lenient))
        min_x, min_y, max_x, max_y = transformer.transform_bounds(
            *envelope.as_tuple(), densify_pts=densify_pts, errcheck=True
        )
    except (ProjError, CRSError) as e:
        raise ReprojectionError(
            f"Cannot transform {envelope} to {target_crs}: {e}",
            source_crs=envelope.crs, target_crs=target_crs,
        ) from e

    if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
        raise ReprojectionError(
            f"Transform of {envelope} to {target_crs} diverged",
            source_crs=envelope.crs, target_crs=target_crs,
        )
    if min_x > max_x:
        # the outline crosses the antimeridian of the target CRS
        if not _crs(target_crs).is_geographic:
            raise ReprojectionError(
                f"Transform of {envelope} to {target_crs} wraps around the "
                f"antimeridian",
                source_crs=envelope.crs, target_crs=target_crs,
            )
        logger.debug("%s crosses the antimeridian of %s, widening to full "
                     "longitude range", envelope, target_crs)
        min_x, max_x = -180.0, 180.0
    try:
        return ReferencedEnvelope(min_x, max_x, min_y, max_y, target_crs)
    except ValueError as e:
        raise ReprojectionError(
            f"Transform of {envelope} to {target_crs} is invalid: {e}",
            source_crs=envelope.crs, target_crs=target_crs,
        ) from e


def merge_all(envelopes, target_crs=None, lenient=True,
              max_points_to_project=DEFAULT_MAX_POINTS_TO_PROJECT):
    """Reduce dirty regions into one enclosing envelope.

    Every envelope is normalized to 2-D and reprojected into ``target_crs``
    (default: the horizontal CRS of the first envelope) before folding.

    Args:
        envelopes:  iterable of ReferencedEnvelope
        target_crs: str or None

    Returns:
        ReferencedEnvelope or None: None when ``envelopes`` is empty

    Raises:
        ReprojectionError: one of the envelopes cannot be reprojected.
    """
    merged = None
    for envelope in envelopes:
        flat = normalize(envelope)
        if target_crs is None:
            target_crs = flat.crs
        flat = reproject(flat, target_crs, lenient, max_points_to_project)
        merged = flat if merged is None else merged.expand_to_include(flat)
    if merged is not None:
        logger.debug("Merged dirty regions into %s", merged)
    return merged
