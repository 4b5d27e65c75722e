"""
ShopGate Resources — Shared Rules
===================================
Rules reused across resource policies. Keeping them here means the
self-action and ownership exclusions read the same everywhere.
"""

from __future__ import annotations

from shopgate.policy.ability import Rule
from shopgate.policy.predicates import (
    is_owner,
    outranks_owner,
    target_is_tenant_owner,
)
from shopgate.policy.result import ReasonCode


# Approval-type abilities: the resource's own user may never act.
NOT_SELF = Rule(~is_owner(), ReasonCode.SELF_ACTION_FORBIDDEN)

# Same, for types whose snapshots may omit owner_user_id.
NOT_SELF_IF_OWNED = Rule(~is_owner(required=False), ReasonCode.SELF_ACTION_FORBIDDEN)

# Requester-only abilities (editing one's own pending request).
OWNER_ONLY = Rule(is_owner(), ReasonCode.OWNERSHIP_REQUIRED)

# Strict seniority over the resource's user.
SENIOR_TO_OWNER = Rule(outranks_owner(), ReasonCode.ROLE_INSUFFICIENT)

# The tenant owner is immutable through generic staff management.
NOT_TENANT_OWNER = Rule(~target_is_tenant_owner(), ReasonCode.ROLE_INSUFFICIENT)
