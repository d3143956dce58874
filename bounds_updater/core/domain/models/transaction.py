# -*- coding: utf-8 -*-
"""
Transaction notifications: the contract between the host edit pipeline and
the bounds updater.

The host raises one TransactionEvent per edit phase and hands the same
TransactionRequest to every callback of a transaction. No pyproj dependency.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .envelope import ReferencedEnvelope
from .qualified_name import QualifiedName


class TransactionEventType(Enum):
    """Lifecycle phase of a single edit notification."""
    PRE_INSERT  = "pre_insert"
    POST_INSERT = "post_insert"
    PRE_UPDATE  = "pre_update"
    POST_UPDATE = "post_update"
    PRE_DELETE  = "pre_delete"


class OperationKind(Enum):
    """Kind of transaction element that raised the notification."""
    INSERT  = "insert"
    UPDATE  = "update"
    DELETE  = "delete"
    REPLACE = "replace"
    NATIVE  = "native"

    @property
    def may_grow_bounds(self) -> bool:
        """Only inserts and updates can enlarge a feature type's extent."""
        return self in (OperationKind.INSERT, OperationKind.UPDATE)


DirtyRegionMap = Dict[QualifiedName, List[ReferencedEnvelope]]


@dataclass
class FeatureSet:
    """Envelopes of the features affected by one edit.

    Attributes:
        envelopes: Per-feature envelopes, all in the same CRS.
    """

    envelopes: List[ReferencedEnvelope] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.envelopes)

    def get_bounds(self) -> Optional[ReferencedEnvelope]:
        """Enclosing envelope of all affected features, or None when empty."""
        bounds = None
        for envelope in self.envelopes:
            bounds = envelope if bounds is None else bounds.expand_to_include(envelope)
        return bounds


@dataclass
class TransactionRequest:
    """Handle of one host transaction.

    ``dirty_regions`` belongs to the request: it is created lazily by the
    dirty region store and disappears together with the request object.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    dirty_regions: Optional[DirtyRegionMap] = field(default=None, repr=False)


@dataclass
class TransactionEvent:
    """One data-store change notification.

    Attributes:
        type:              Lifecycle phase (PRE_INSERT, POST_UPDATE, ...).
        source:            Kind of element that caused the change.
        layer_name:        Qualified name of the affected feature type.
        affected_features: Features touched by the change.
        request:           The transaction this change belongs to.
    """

    type: TransactionEventType
    source: OperationKind
    layer_name: QualifiedName
    affected_features: FeatureSet
    request: TransactionRequest
