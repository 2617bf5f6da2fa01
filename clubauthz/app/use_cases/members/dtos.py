from datetime import datetime
from typing import List

from pydantic import BaseModel

from clubauthz.domain.entities import ClubMembership


class MembershipResponse(BaseModel):
    id: str
    club_id: str
    user_id: str
    roles: List[str]
    is_active: bool
    joined_at: datetime

    @classmethod
    def from_entity(cls, membership: ClubMembership) -> "MembershipResponse":
        return cls(
            id=str(membership.id),
            club_id=str(membership.club_id),
            user_id=str(membership.user_id),
            roles=list(membership.roles),
            is_active=membership.is_active,
            joined_at=membership.joined_at,
        )
