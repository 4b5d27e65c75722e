"""
ShopGate Django HTTP adapter.
Thin framework glue over the PolicyRegistry.
"""
