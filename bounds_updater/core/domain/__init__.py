# -*- coding: utf-8 -*-
"""
Domain package: pure Python catalog and transaction entities.

Rules:
  - No pyproj imports anywhere in this package
  - No database imports anywhere in this package
  - Only ids, names, envelopes, enums and in-memory predicates

Public API:
    ReferencedEnvelope : value object: CRS-tagged bounding box
    QualifiedName      : value object: namespace-qualified feature type name
    FeatureType        : entity: collection with native bounds
    Layer              : entity: published layer backed by a feature type
    LayerGroup         : entity: group of layers / nested groups with bounds
    GroupFilter        : predicates for layer group queries
    TransactionEvent   : notification raised by the host per edit phase
    TransactionRequest : host transaction handle owning the dirty regions
"""

from .errors import (
    BoundsUpdateError,
    ReprojectionError,
    CatalogError,
    CatalogQueryError,
    CatalogSaveError,
)
from .models import (
    ReferencedEnvelope,
    QualifiedName,
    FeatureType,
    Layer,
    LayerGroup,
    GroupFilter,
    MemberIn,
    RootIn,
    AnyOf,
    contains_any,
    TransactionEventType,
    OperationKind,
    FeatureSet,
    TransactionRequest,
    TransactionEvent,
    DirtyRegionMap,
)

__all__ = [
    "BoundsUpdateError",
    "ReprojectionError",
    "CatalogError",
    "CatalogQueryError",
    "CatalogSaveError",
    "ReferencedEnvelope",
    "QualifiedName",
    "FeatureType",
    "Layer",
    "LayerGroup",
    "GroupFilter",
    "MemberIn",
    "RootIn",
    "AnyOf",
    "contains_any",
    "TransactionEventType",
    "OperationKind",
    "FeatureSet",
    "TransactionRequest",
    "TransactionEvent",
    "DirtyRegionMap",
]
