import sqlite3

import pytest

from bounds_updater import BoundsUpdateTransactionListener, SqliteCatalogRepository
from bounds_updater.core.domain import (
    AnyOf,
    CatalogQueryError,
    FeatureSet,
    MemberIn,
    OperationKind,
    QualifiedName,
    ReferencedEnvelope,
    RootIn,
    TransactionEvent,
    TransactionEventType,
    TransactionRequest,
    contains_any,
)

WGS84 = "EPSG:4326"
OLD = ReferencedEnvelope(-90, 0, 0, 45, WGS84)


@pytest.fixture
def repo(tmp_path):
    with SqliteCatalogRepository(str(tmp_path / "catalog.sqlite")) as catalog:
        yield catalog


@pytest.fixture
def seeded(repo):
    ft = repo.add_feature_type("foo:bar", WGS84, OLD)
    other_ft = repo.add_feature_type("foo:quux", WGS84, OLD)
    layer = repo.add_layer("layer", ft, layer_id="layerId")
    other = repo.add_layer("otherLayer", other_ft, layer_id="otherLayerId")
    direct = repo.add_layer_group("direct", [layer], OLD, root=other, group_id="directId")
    repo.add_layer_group("directRoot", [other], OLD, root=layer, group_id="directRootId")
    repo.add_layer_group("unaffected", [other], OLD, group_id="unaffectedId")
    repo.add_layer_group("parent", [other, direct], OLD, group_id="parentId")
    return repo


def list_ids(repo, group_filter):
    with repo.list_layer_groups(group_filter) as groups:
        return sorted(g.id for g in groups)


def test_feature_type_round_trip(repo):
    repo.add_feature_type("foo:bar", WGS84, OLD)

    ft = repo.get_feature_type_by_name(QualifiedName("foo", "bar"))

    assert ft.name == QualifiedName("foo", "bar")
    assert ft.native_bounding_box == OLD
    assert repo.get_feature_type_by_name("foo:missing") is None


def test_feature_type_without_bounds(repo):
    repo.add_feature_type("foo:empty", "EPSG:28992")

    ft = repo.get_feature_type_by_name("foo:empty")

    assert ft.native_bounding_box is None
    assert ft.bounds_crs == "EPSG:28992"


def test_layers_for_feature_type(seeded):
    ft = seeded.get_feature_type_by_name("foo:bar")

    layers = seeded.get_layers(ft)

    assert [layer.id for layer in layers] == ["layerId"]
    assert layers[0].resource == QualifiedName("foo", "bar")


@pytest.mark.parametrize(
    "group_filter, expected",
    [
        (MemberIn(["layerId"]), ["directId"]),
        (RootIn(["layerId"]), ["directRootId"]),
        (contains_any(["layerId"]), ["directId", "directRootId"]),
        (MemberIn(["directId"]), ["parentId"]),
        (AnyOf(()), []),
        (MemberIn([]), []),
    ],
)
def test_group_filters_compile_to_sql(seeded, group_filter, expected):
    assert list_ids(seeded, group_filter) == expected


def test_sql_and_in_memory_filters_agree(seeded):
    group_filter = contains_any(["otherLayerId"])
    with seeded.list_layer_groups(AnyOf(())) as groups:
        assert list(groups) == []
    with seeded.list_layer_groups(MemberIn(["otherLayerId", "directId", "layerId"])) as groups:
        all_groups = list(groups)

    in_memory = sorted(g.id for g in all_groups if group_filter.matches(g))

    assert list_ids(seeded, group_filter) == in_memory


def test_group_members_keep_order(seeded):
    with seeded.list_layer_groups(MemberIn(["directId"])) as groups:
        (parent,) = list(groups)
    assert parent.member_ids == ["otherLayerId", "directId"]
    assert parent.bounds == OLD


def test_save_persists_bounds(seeded):
    ft = seeded.get_feature_type_by_name("foo:bar")
    ft.expand_bounds(ReferencedEnvelope(-180, 180, 0, 90, WGS84))
    seeded.save(ft)
    with seeded.list_layer_groups(MemberIn(["layerId"])) as groups:
        (group,) = list(groups)
    group.expand_bounds(ReferencedEnvelope(0, 10, 0, 10, WGS84))
    seeded.save(group)

    assert seeded.get_feature_type_by_name("foo:bar").native_bounding_box == \
        ReferencedEnvelope(-180, 180, 0, 90, WGS84)
    with seeded.list_layer_groups(MemberIn(["layerId"])) as groups:
        (reloaded,) = list(groups)
    assert reloaded.bounds == ReferencedEnvelope(-90, 10, 0, 45, WGS84)


def test_save_rejects_unknown_entities(repo):
    with pytest.raises(TypeError):
        repo.save(object())


def test_closed_iterator_stops(seeded):
    iterator = seeded.list_layer_groups(MemberIn(["otherLayerId"]))
    next(iterator)
    iterator.close()
    iterator.close()
    assert iterator.closed
    assert list(iterator) == []


def test_query_errors_are_wrapped(seeded, monkeypatch):
    def broken(group_filter):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(seeded._cm, "query_layer_groups", broken)

    with pytest.raises(CatalogQueryError):
        seeded.list_layer_groups(MemberIn(["layerId"]))


def test_end_to_end_with_sqlite_catalog(seeded):
    listener = BoundsUpdateTransactionListener(seeded)
    request = TransactionRequest()
    for bounds in (ReferencedEnvelope(-180, 0, 0, 90, WGS84),
                   ReferencedEnvelope(0, 180, 0, 90, WGS84)):
        listener.data_store_change(TransactionEvent(
            type=TransactionEventType.PRE_INSERT,
            source=OperationKind.INSERT,
            layer_name=QualifiedName("foo", "bar"),
            affected_features=FeatureSet([bounds]),
            request=request,
        ))

    report = listener.after_transaction(request, None, committed=True)

    union = ReferencedEnvelope(-180, 180, 0, 90, WGS84)
    assert report['feature_types'] == ["foo:bar"]
    assert sorted(report['layer_groups']) == ["directId", "directRootId", "parentId"]
    assert seeded.get_feature_type_by_name("foo:bar").native_bounding_box == union
    with seeded.list_layer_groups(contains_any(["layerId", "otherLayerId", "directId"])) as groups:
        bounds = {g.id: g.bounds for g in groups}
    assert bounds["directId"] == union
    assert bounds["directRootId"] == union
    assert bounds["parentId"] == union
    assert bounds["unaffectedId"] == OLD
