"""
ShopGate Scope — Shop Scoping Primitives
"""

from shopgate.scope.resolver import ScopeResolver, ShopId, as_shop_set

__all__ = [
    "ScopeResolver",
    "ShopId",
    "as_shop_set",
]
