from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from bounds_updater.core.catalog import CatalogRepository, CloseableIterator
from bounds_updater.core.domain import (
    CatalogQueryError,
    CatalogSaveError,
    FeatureSet,
    FeatureType,
    Layer,
    LayerGroup,
    OperationKind,
    QualifiedName,
    ReferencedEnvelope,
    TransactionEvent,
    TransactionEventType,
)

WGS84 = "EPSG:4326"


class FakeCatalog(CatalogRepository):
    """In-memory catalog that evaluates group filters and records calls."""

    def __init__(self) -> None:
        self.feature_types: Dict[QualifiedName, FeatureType] = {}
        self.layers: Dict[str, List[Layer]] = {}
        self.groups: List[LayerGroup] = []
        self.saved: List[object] = []
        self.lookups: List[QualifiedName] = []
        self.queries: List[object] = []
        self.opened_iterators: List[CloseableIterator] = []
        self.fail_save_ids: set[str] = set()
        self.fail_query_after: Optional[int] = None
        self.fail_layers = False

    # catalog contract -------------------------------------------------

    def get_feature_type_by_name(self, name):
        self.lookups.append(name)
        return self.feature_types.get(QualifiedName.parse(name))

    def get_layers(self, feature_type):
        if self.fail_layers:
            raise CatalogQueryError("layers unavailable")
        return list(self.layers.get(feature_type.prefixed_name, []))

    def list_layer_groups(self, group_filter):
        self.queries.append(group_filter)
        if self.fail_query_after is not None and len(self.queries) > self.fail_query_after:
            raise CatalogQueryError("query failed")
        matching = [g for g in self.groups if group_filter.matches(g)]
        iterator = CloseableIterator(matching)
        self.opened_iterators.append(iterator)
        return iterator

    def save(self, entity):
        entity_id = getattr(entity, "id", None)
        if entity_id in self.fail_save_ids:
            raise CatalogSaveError(f"cannot save {entity_id}")
        self.saved.append(entity)

    # seeding ----------------------------------------------------------

    def add_feature_type(self, name, bounds=None, native_crs=WGS84):
        qname = QualifiedName.parse(name)
        feature_type = FeatureType(name=qname, native_crs=native_crs,
                                   native_bounding_box=bounds, id=f"{qname}Id")
        self.feature_types[qname] = feature_type
        return feature_type

    def add_layer(self, feature_type, name):
        layer = Layer(id=f"{name}Id", name=name, resource=feature_type.name)
        self.layers.setdefault(feature_type.prefixed_name, []).append(layer)
        return layer

    def add_group(self, name, bounds, root=None, *members):
        group = LayerGroup(
            id=f"{name}Id",
            name=name,
            bounds=bounds,
            member_ids=[m.id for m in members],
            root_layer_id=root.id if root is not None else None,
        )
        self.groups.append(group)
        return group

    def saved_ids(self):
        return [getattr(e, "id", None) for e in self.saved]


@pytest.fixture
def catalog():
    return FakeCatalog()


def make_event(request, layer_name, *envelopes,
               event_type=TransactionEventType.PRE_INSERT,
               source=OperationKind.INSERT):
    return TransactionEvent(
        type=event_type,
        source=source,
        layer_name=QualifiedName.parse(layer_name),
        affected_features=FeatureSet(list(envelopes)),
        request=request,
    )


def env(x1, x2, y1, y2, crs=WGS84):
    return ReferencedEnvelope(x1, x2, y1, y2, crs)

