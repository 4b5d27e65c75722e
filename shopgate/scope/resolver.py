"""
ShopGate Scope — Shop Assignment Resolver
==========================================
Set-intersection checks over shop assignments.

Doctrine: shop assignments are always queried as a set, never as a
single value. An empty actor set never overlaps anything, and a
resource with no shop never overlaps a non-global actor.

Global roles bypass this component entirely; the caller decides
that (see ResourcePolicy), not the resolver.
"""

from __future__ import annotations

import uuid
from typing import AbstractSet, FrozenSet, Iterable, Optional, Union

ShopId = Union[int, str, uuid.UUID]


def as_shop_set(shops) -> FrozenSet:
    """Normalize None / a single shop id / an iterable into a frozenset."""
    if shops is None:
        return frozenset()
    if isinstance(shops, (str, bytes, int, uuid.UUID)):
        return frozenset({shops})
    return frozenset(s for s in shops if s is not None)


class ScopeResolver:
    """
    Stateless shop-scope primitive.

    Usage:
        resolver = ScopeResolver()
        resolver.overlaps({3, 9}, 7)           # False
        resolver.overlaps({3, 9}, {9, 12})     # True
    """

    def contains(
        self, actor_shops: AbstractSet, shop_id: Optional[ShopId]
    ) -> bool:
        """Membership test for a single resource shop."""
        if shop_id is None or not actor_shops:
            return False
        return shop_id in actor_shops

    def intersects(
        self, actor_shops: AbstractSet, target_shops: Iterable
    ) -> bool:
        """Non-empty intersection between two shop sets."""
        target = as_shop_set(target_shops)
        if not actor_shops or not target:
            return False
        return not frozenset(actor_shops).isdisjoint(target)

    def overlaps(self, actor_shops: AbstractSet, target) -> bool:
        """
        Dispatch on the shape of target: a single shop id uses the
        membership test, a collection uses the intersection test.
        """
        if target is None:
            return False
        if isinstance(target, (str, bytes, int, uuid.UUID)):
            return self.contains(actor_shops, target)
        return self.intersects(actor_shops, target)

    def shared_shops(
        self, actor_shops: AbstractSet, target_shops: Iterable
    ) -> FrozenSet:
        return frozenset(actor_shops) & as_shop_set(target_shops)
