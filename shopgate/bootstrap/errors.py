"""
ShopGate Bootstrap — Startup Errors
=====================================
If a policy invariant is violated at startup, the engine must refuse
to serve decisions.
"""

from shopgate.exceptions import PolicyConfigurationError


class SystemBootstrapError(PolicyConfigurationError):
    """
    Raised when the assembled registry violates a startup invariant.

    If this exception is raised:
    - The registry MUST NOT be used
    - No fallback to a partial registry
    - No warning-only mode
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"SHOPGATE BOOTSTRAP FAILURE — {invariant}: {detail}"
        )
