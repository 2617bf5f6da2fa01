"""
Club Authorization Domain Enums

All enumeration types used across domain entities and the policy table.
"""

from enum import Enum


class Role(str, Enum):
    """Role a user can hold within a club or facility"""

    FACILITY_ADMIN = "FACILITY_ADMIN"
    CLUB_ADMIN = "CLUB_ADMIN"
    COACH = "COACH"
    ATHLETE = "ATHLETE"
    PARENT = "PARENT"


ADMIN_ROLES = frozenset({Role.FACILITY_ADMIN, Role.CLUB_ADMIN})

ROLE_ORDER = {role: index for index, role in enumerate(Role)}


def sort_roles(roles) -> list:
    """Deduplicate and order roles by declaration order."""
    return sorted(set(roles), key=lambda role: ROLE_ORDER[role])


def parse_roles(values) -> list:
    """Convert stored role strings to Role values, skipping unknown names."""
    roles = []
    for value in values or []:
        try:
            roles.append(Role(value))
        except ValueError:
            continue
    return roles


class RoleSource(str, Enum):
    """Which membership representation supplied a user's standing roles"""

    membership = "membership"
    legacy = "legacy"
    none = "none"


class ContextScope(str, Enum):
    """Tenant level a request is scoped to"""

    club = "club"
    facility = "facility"


class AuditAction(str, Enum):
    """Security-relevant actions recorded in the audit log"""

    ROLE_CHANGED = "ROLE_CHANGED"
    MEMBER_INVITED = "MEMBER_INVITED"
    DATA_EXPORTED = "DATA_EXPORTED"
    API_KEY_CREATED = "API_KEY_CREATED"
    API_KEY_REVOKED = "API_KEY_REVOKED"
    CONTEXT_SWITCHED = "CONTEXT_SWITCHED"
    PERMISSION_GRANT_CREATED = "PERMISSION_GRANT_CREATED"
    PERMISSION_GRANT_REVOKED = "PERMISSION_GRANT_REVOKED"
    PERMISSION_GRANT_EXPIRED = "PERMISSION_GRANT_EXPIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    SSO_CONFIG_UPDATED = "SSO_CONFIG_UPDATED"
    SSO_ENABLED = "SSO_ENABLED"
    SSO_DISABLED = "SSO_DISABLED"
    SSO_ROLE_MAPPING_CHANGED = "SSO_ROLE_MAPPING_CHANGED"
    ADMIN_USER_DEACTIVATED = "ADMIN_USER_DEACTIVATED"
    ADMIN_USER_REACTIVATED = "ADMIN_USER_REACTIVATED"
    AUDIT_LOGS_PURGED = "AUDIT_LOGS_PURGED"


AUDIT_ACTION_DESCRIPTIONS = {
    AuditAction.ROLE_CHANGED: "Member role changed",
    AuditAction.MEMBER_INVITED: "Member invited to club",
    AuditAction.DATA_EXPORTED: "Data exported",
    AuditAction.API_KEY_CREATED: "API key created",
    AuditAction.API_KEY_REVOKED: "API key revoked",
    AuditAction.CONTEXT_SWITCHED: "Active club or facility changed",
    AuditAction.PERMISSION_GRANT_CREATED: "Admin granted temporary elevated permissions to user",
    AuditAction.PERMISSION_GRANT_REVOKED: "Admin revoked temporary permissions from user",
    AuditAction.PERMISSION_GRANT_EXPIRED: "Temporary permissions expired automatically",
    AuditAction.PERMISSION_DENIED: "Access denied to resource",
    AuditAction.SSO_CONFIG_UPDATED: "Facility admin updated SSO configuration",
    AuditAction.SSO_ENABLED: "SSO was enabled for facility",
    AuditAction.SSO_DISABLED: "SSO was disabled for facility",
    AuditAction.SSO_ROLE_MAPPING_CHANGED: "SSO role mappings were modified",
    AuditAction.ADMIN_USER_DEACTIVATED: "Super admin deactivated a user",
    AuditAction.ADMIN_USER_REACTIVATED: "Super admin reactivated a user",
    AuditAction.AUDIT_LOGS_PURGED: "Audit entries past retention were deleted",
}

# Tenant id recorded for cross-tenant platform actions
PLATFORM_TENANT = "PLATFORM"

# Actor id recorded for scheduled, non-human actions
SYSTEM_ACTOR = "system"
