"""
ShopGate — Configuration Errors
=================================
Structured errors for integration and configuration bugs.

These are NOT authorization denials. A denial is an ordinary
Decision(allowed=False). Everything in this module indicates that
the caller or the deployment configuration is wrong, and must fail
loudly instead of being converted into a "deny".
"""

from __future__ import annotations


class PolicyConfigurationError(Exception):
    """Base error for every caller/integration/configuration bug."""
    pass


# ══════════════════════════════════════════════════════════════
# DISPATCH ERRORS (raised by PolicyRegistry / ResourcePolicy)
# ══════════════════════════════════════════════════════════════

class UnregisteredResourceTypeError(PolicyConfigurationError):
    """No policy is registered for the requested resource type."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(
            f"No policy registered for resource type '{resource_type}'."
        )


class UnknownAbilityError(PolicyConfigurationError):
    """Resource type exists but does not define the ability."""

    def __init__(self, resource_type: str, ability: str):
        self.resource_type = resource_type
        self.ability = ability
        super().__init__(
            f"Ability '{ability}' is not defined for "
            f"resource type '{resource_type}'."
        )


class MissingResourceFieldError(PolicyConfigurationError):
    """The ability needs a resource field the snapshot does not carry."""

    def __init__(self, resource_type: str, field_name: str, ability: str = ""):
        self.resource_type = resource_type
        self.field_name = field_name
        self.ability = ability
        where = f" (ability '{ability}')" if ability else ""
        super().__init__(
            f"Resource '{resource_type}' is missing required field "
            f"'{field_name}'{where}."
        )


class MissingContextError(PolicyConfigurationError):
    """The ability needs a context entry the caller did not supply."""

    def __init__(self, resource_type: str, ability: str, key: str, detail: str = ""):
        self.resource_type = resource_type
        self.ability = ability
        self.key = key
        suffix = f" {detail}" if detail else ""
        super().__init__(
            f"Ability '{resource_type}.{ability}' requires context "
            f"'{key}'.{suffix}"
        )


class ResourceTypeMismatchError(PolicyConfigurationError):
    """Snapshot resource_type differs from the type being evaluated."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected a '{expected}' resource snapshot, got '{actual}'."
        )


# ══════════════════════════════════════════════════════════════
# TABLE ERRORS (raised at startup while building static config)
# ══════════════════════════════════════════════════════════════

class UnknownStatusError(PolicyConfigurationError):
    """A status value is not part of the resource type's vocabulary."""

    def __init__(self, resource_type: str, status: str):
        self.resource_type = resource_type
        self.status = status
        super().__init__(
            f"Status '{status}' is not defined for "
            f"resource type '{resource_type}'."
        )


class UnknownCapabilityError(PolicyConfigurationError):
    """A role table names a capability outside the closed enum."""

    def __init__(self, capability: str, role: str = ""):
        self.capability = capability
        self.role = role
        owner = f" for role '{role}'" if role else ""
        super().__init__(f"Unknown capability '{capability}'{owner}.")


class InvalidRoleTableError(PolicyConfigurationError):
    """Role hierarchy table violates a structural rule."""
    pass


class InvalidTransitionTableError(PolicyConfigurationError):
    """Status transition table violates a structural rule."""

    def __init__(self, resource_type: str, detail: str):
        self.resource_type = resource_type
        self.detail = detail
        super().__init__(
            f"Invalid transition table for '{resource_type}': {detail}"
        )


class InvalidPolicyConfigError(PolicyConfigurationError):
    """A deployment override document is malformed."""

    def __init__(self, detail: str, source: str = ""):
        self.detail = detail
        self.source = source
        where = f" ({source})" if source else ""
        super().__init__(f"Invalid policy configuration{where}: {detail}")


# ══════════════════════════════════════════════════════════════
# REGISTRY ERRORS
# ══════════════════════════════════════════════════════════════

class DuplicateResourcePolicyError(PolicyConfigurationError):
    """A policy for the same resource type is already registered."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(
            f"A policy for resource type '{resource_type}' "
            f"is already registered."
        )


class RegistryLockedError(PolicyConfigurationError):
    """Policy registry is locked — no modifications allowed."""

    def __init__(self):
        super().__init__(
            "Policy Registry is locked after bootstrap. "
            "No dynamic policy registration allowed."
        )
