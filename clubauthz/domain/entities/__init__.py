"""
Club Authorization Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import (
    ADMIN_ROLES,
    AUDIT_ACTION_DESCRIPTIONS,
    PLATFORM_TENANT,
    SYSTEM_ACTOR,
    AuditAction,
    ContextScope,
    Role,
    RoleSource,
    parse_roles,
    sort_roles,
)

from .user import User
from .facility import Facility
from .club import Club
from .club_membership import ClubMembership
from .team_member import TeamMember
from .facility_membership import FacilityMembership
from .parent_athlete_link import ParentAthleteLink
from .permission_grant import PermissionGrant
from .audit_log import AuditLog
from .sso_config import SsoConfig
from .super_admin import SuperAdmin
from .api_key import ApiKey

__all__ = [
    # Enums and constants
    "ADMIN_ROLES",
    "AUDIT_ACTION_DESCRIPTIONS",
    "PLATFORM_TENANT",
    "SYSTEM_ACTOR",
    "AuditAction",
    "ContextScope",
    "Role",
    "RoleSource",
    "parse_roles",
    "sort_roles",
    # Entities
    "User",
    "Facility",
    "Club",
    "ClubMembership",
    "TeamMember",
    "FacilityMembership",
    "ParentAthleteLink",
    "PermissionGrant",
    "AuditLog",
    "SsoConfig",
    "SuperAdmin",
    "ApiKey",
]
