# -*- coding: utf-8 -*-
from .envelope import ReferencedEnvelope
from .qualified_name import QualifiedName
from .feature_type import FeatureType
from .layer import Layer
from .layer_group import LayerGroup
from .group_filter import GroupFilter, MemberIn, RootIn, AnyOf, contains_any
from .transaction import (
    TransactionEventType,
    OperationKind,
    FeatureSet,
    TransactionRequest,
    TransactionEvent,
    DirtyRegionMap,
)

__all__ = [
    "ReferencedEnvelope", "QualifiedName", "FeatureType", "Layer", "LayerGroup",
    "GroupFilter", "MemberIn", "RootIn", "AnyOf", "contains_any",
    "TransactionEventType", "OperationKind", "FeatureSet",
    "TransactionRequest", "TransactionEvent", "DirtyRegionMap",
]
