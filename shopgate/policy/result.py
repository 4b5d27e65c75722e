"""
ShopGate Policy — Decision Model
==================================
Decision: outcome of evaluating one ability for one actor/resource.

A denial is a value, not an exception. Every denial carries a reason
code from the closed ReasonCode set; an allowed decision carries none.

These are pure data structures. No side effects. No persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# ══════════════════════════════════════════════════════════════
# REASON CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """Closed set of denial reasons, one per evaluation step."""
    TENANT_MISMATCH = "tenant_mismatch"
    ROLE_INSUFFICIENT = "role_insufficient"
    SCOPE_MISMATCH = "scope_mismatch"
    LIFECYCLE_BLOCKED = "lifecycle_blocked"
    SELF_ACTION_FORBIDDEN = "self_action_forbidden"
    OWNERSHIP_REQUIRED = "ownership_required"

    ALL = frozenset({
        "tenant_mismatch",
        "role_insufficient",
        "scope_mismatch",
        "lifecycle_blocked",
        "self_action_forbidden",
        "ownership_required",
    })


_MESSAGES = {
    ReasonCode.TENANT_MISMATCH: "Access denied: resource belongs to another tenant.",
    ReasonCode.ROLE_INSUFFICIENT: "Your role does not permit this action.",
    ReasonCode.SCOPE_MISMATCH: "You are not assigned to the shop this resource belongs to.",
    ReasonCode.LIFECYCLE_BLOCKED: "This action is not available in the resource's current state.",
    ReasonCode.SELF_ACTION_FORBIDDEN: "You cannot perform this action on your own record.",
    ReasonCode.OWNERSHIP_REQUIRED: "Only the owner of this record can perform this action.",
}


def default_message(reason_code: str) -> str:
    return _MESSAGES.get(reason_code, "Action not permitted.")


# ══════════════════════════════════════════════════════════════
# DECISION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Decision:
    """
    Fields:
        allowed:        True if the ability may proceed.
        reason_code:    ReasonCode value when denied, None when allowed.
        message:        User-facing explanation (never leaks tenant data).
        ability:        Ability evaluated.
        resource_type:  Resource type evaluated.
    """

    allowed: bool
    reason_code: Optional[str] = None
    message: str = ""
    ability: str = ""
    resource_type: str = ""

    def __post_init__(self):
        if not isinstance(self.allowed, bool):
            raise ValueError("allowed must be a bool.")

        if self.allowed and self.reason_code is not None:
            raise ValueError("An allowed decision carries no reason_code.")

        if not self.allowed and self.reason_code not in ReasonCode.ALL:
            raise ValueError(
                f"reason_code '{self.reason_code}' not valid. "
                f"Must be one of: {sorted(ReasonCode.ALL)}"
            )

    def __bool__(self) -> bool:
        return self.allowed

    @property
    def denied(self) -> bool:
        return not self.allowed

    @classmethod
    def allow(cls, ability: str = "", resource_type: str = "") -> Decision:
        return cls(allowed=True, ability=ability, resource_type=resource_type)

    @classmethod
    def deny(
        cls,
        reason_code: str,
        ability: str = "",
        resource_type: str = "",
        message: str = "",
    ) -> Decision:
        return cls(
            allowed=False,
            reason_code=reason_code,
            message=message or default_message(reason_code),
            ability=ability,
            resource_type=resource_type,
        )

    def to_dict(self) -> dict:
        return {
            "allowed": self.allowed,
            "reason_code": self.reason_code,
            "message": self.message,
            "ability": self.ability,
            "resource_type": self.resource_type,
        }
