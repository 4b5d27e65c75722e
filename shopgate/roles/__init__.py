"""
ShopGate Roles — Hierarchy and Capability Tables
=================================================
Closed role enum, closed capability enum, and the immutable
RoleHierarchy that answers level / capability / seniority questions.
"""

from shopgate.roles.defaults import DEFAULT_ROLE_TABLE
from shopgate.roles.hierarchy import RoleHierarchy
from shopgate.roles.models import (
    Capability,
    Role,
    RoleDefinition,
    resolve_capabilities,
    resolve_capability,
)


def default_role_hierarchy() -> RoleHierarchy:
    return RoleHierarchy(DEFAULT_ROLE_TABLE)


__all__ = [
    "Capability",
    "Role",
    "RoleDefinition",
    "RoleHierarchy",
    "DEFAULT_ROLE_TABLE",
    "default_role_hierarchy",
    "resolve_capabilities",
    "resolve_capability",
]
