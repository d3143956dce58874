# -*- coding: utf-8 -*-
"""Use cases package: exports all commands and use case classes."""

from .commands import RecordChangeCommand, PropagateBoundsCommand
from .record_dirty_region import RecordDirtyRegion
from .propagate_bounds import PropagateBounds

__all__ = [
    'RecordChangeCommand',
    'PropagateBoundsCommand',
    'RecordDirtyRegion',
    'PropagateBounds',
]
