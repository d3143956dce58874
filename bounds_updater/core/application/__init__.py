# -*- coding: utf-8 -*-
"""
Application layer: use cases of the bounds updater.

Each use case in this layer:
  - Receives a Command dataclass (input DTO)
  - Orchestrates domain objects and the catalog repository
  - Returns a plain result (bool or dict)
  - Lets unexpected exceptions propagate (no catch-all here)

The BoundsUpdateTransactionListener is the only place that swallows errors.

Layer position:
    Host transaction pipeline
      ↓ TransactionEvent / TransactionRequest
    BoundsUpdateTransactionListener (error boundary, creates commands)
      ↓ Command dataclasses
    Use Cases (this package) + dirty region store + containment resolver
      ↓ domain objects + geometry_utils
    Infrastructure (CatalogRepository, CatalogManager)
"""

from .use_cases import (
    RecordChangeCommand,
    PropagateBoundsCommand,
    RecordDirtyRegion,
    PropagateBounds,
)
from .containment import ContainmentResolver

__all__ = [
    'RecordChangeCommand',
    'PropagateBoundsCommand',
    'RecordDirtyRegion',
    'PropagateBounds',
    'ContainmentResolver',
]
