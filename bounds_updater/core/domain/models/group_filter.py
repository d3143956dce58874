# -*- coding: utf-8 -*-
"""
Group filters: predicates used to query layer groups by membership.

Filters are plain values: the catalog store decides how to evaluate them
(the SQLite store compiles them to SQL, in-memory stores call ``matches``).
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Tuple

from .layer_group import LayerGroup


class GroupFilter:
    """Base class for layer group predicates."""

    def matches(self, group: LayerGroup) -> bool:
        raise NotImplementedError

    def __or__(self, other: 'GroupFilter') -> 'AnyOf':
        return AnyOf.of(self, other)


@dataclass(frozen=True)
class MemberIn(GroupFilter):
    """Groups having at least one direct member whose id is in ``ids``."""

    ids: FrozenSet[str]

    def __init__(self, ids: Iterable[str]):
        object.__setattr__(self, 'ids', frozenset(ids))

    def matches(self, group: LayerGroup) -> bool:
        return any(member_id in self.ids for member_id in group.member_ids)


@dataclass(frozen=True)
class RootIn(GroupFilter):
    """Groups whose root layer id is in ``ids``."""

    ids: FrozenSet[str]

    def __init__(self, ids: Iterable[str]):
        object.__setattr__(self, 'ids', frozenset(ids))

    def matches(self, group: LayerGroup) -> bool:
        return group.root_layer_id is not None and group.root_layer_id in self.ids


@dataclass(frozen=True)
class AnyOf(GroupFilter):
    """Logical OR of other filters. An empty AnyOf matches nothing."""

    filters: Tuple[GroupFilter, ...]

    @classmethod
    def of(cls, *filters: GroupFilter) -> 'AnyOf':
        flat = []
        for f in filters:
            if isinstance(f, AnyOf):
                flat.extend(f.filters)
            else:
                flat.append(f)
        return cls(tuple(flat))

    def matches(self, group: LayerGroup) -> bool:
        return any(f.matches(group) for f in self.filters)


def contains_any(ids: Iterable[str]) -> AnyOf:
    """Groups that hold one of ``ids`` as a member or as their root layer."""
    ids = frozenset(ids)
    return AnyOf.of(MemberIn(ids), RootIn(ids))
