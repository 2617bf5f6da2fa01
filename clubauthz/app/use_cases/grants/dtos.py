"""
Permission Grant DTOs
"""

import re
from datetime import datetime, timedelta
from typing import List, Optional, Union

from pydantic import BaseModel

from clubauthz.domain.entities import PermissionGrant

DURATION_PRESETS = {
    "1h": timedelta(hours=1),
    "4h": timedelta(hours=4),
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}

_DURATION_PATTERN = re.compile(r"^(\d+)([hd])$")


def parse_duration_hours(value: Union[str, int, float, None]) -> Optional[float]:
    """
    Accepts a preset ("1h", "7d"), "<n>h"/"<n>d", or a number of hours.
    Returns the length in hours, or None when the value cannot be understood
    or is not positive. Callers check the upper bound before building a
    timedelta.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if value > 0 else None

    text = str(value).strip().lower()
    if text in DURATION_PRESETS:
        return DURATION_PRESETS[text].total_seconds() / 3600
    match = _DURATION_PATTERN.match(text)
    if match is None:
        return None
    amount = int(match.group(1))
    if amount <= 0:
        return None
    return amount if match.group(2) == "h" else amount * 24


class GrantResponse(BaseModel):
    id: str
    club_id: str
    user_id: str
    granted_by: str
    roles: List[str]
    reason: Optional[str] = None
    expires_at: datetime
    revoked_at: Optional[datetime] = None
    created_at: datetime
    is_active: bool

    @classmethod
    def from_entity(cls, grant: PermissionGrant, now: datetime) -> "GrantResponse":
        return cls(
            id=str(grant.id),
            club_id=str(grant.club_id),
            user_id=str(grant.user_id),
            granted_by=str(grant.granted_by),
            roles=list(grant.roles),
            reason=grant.reason,
            expires_at=grant.expires_at,
            revoked_at=grant.revoked_at,
            created_at=grant.created_at,
            is_active=grant.is_active(now),
        )


class GrantListResponse(BaseModel):
    grants: List[GrantResponse]


class RevokeGrantResponse(BaseModel):
    """status is "revoked" for the call that revoked it, "already_revoked" otherwise"""

    grant_id: str
    status: str
