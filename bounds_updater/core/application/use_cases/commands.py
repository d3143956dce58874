# -*- coding: utf-8 -*-
"""
Commands handed from the transaction listener to the bounds use cases.

RecordChangeCommand wraps one edit notification; PropagateBoundsCommand
pairs a committed request with the reprojection settings in force.
"""

from dataclasses import dataclass

from ...domain.models import TransactionEvent, TransactionRequest


@dataclass
class RecordChangeCommand:
    """Command for the RecordDirtyRegion use case.

    Attributes:
        event: TransactionEvent raised by the host for one edit phase.
    """
    event: TransactionEvent


@dataclass
class PropagateBoundsCommand:
    """Command for the PropagateBounds use case.

    Applies the dirty regions accumulated by a committed transaction to the
    stored bounds of feature types and their layer groups.

    Attributes:
        request:               TransactionRequest holding the dirty regions.
        lenient:               Allow ballpark (datum-less) CRS transforms.
        max_points_to_project: Point budget for envelope reprojection.
    """
    request: TransactionRequest
    lenient: bool = True
    max_points_to_project: int = 1000
