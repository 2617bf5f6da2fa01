"""
Role Resolver

Computes the standing roles a user holds in a club from the membership
tables. Every call reads the store; nothing is cached between calls.
"""

from dataclasses import dataclass, field
from typing import List
from uuid import UUID

from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.entities import Role, RoleSource, parse_roles, sort_roles


@dataclass
class ResolvedRoles:
    roles: List[Role] = field(default_factory=list)
    source: RoleSource = RoleSource.none


class RoleResolver:
    """
    Precedence:
    1. Active ClubMembership (current multi-role form) - authoritative
    2. Legacy TeamMember row - its single role, only when no current row exists
    3. Nothing - empty role set, not an error

    An inactive ClubMembership shadows the legacy row: deactivation must not
    be undone by an older representation of the same pair.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve_roles(self, club_id: UUID, user_id: UUID) -> ResolvedRoles:
        membership = await self.uow.memberships.get_by_user_and_club(user_id, club_id)
        if membership is not None:
            if not membership.is_active:
                return ResolvedRoles()
            return ResolvedRoles(sort_roles(parse_roles(membership.roles)), RoleSource.membership)

        legacy = await self.uow.memberships.get_legacy(user_id, club_id)
        if legacy is not None:
            return ResolvedRoles(parse_roles([legacy.role]), RoleSource.legacy)

        return ResolvedRoles()

    async def has_membership(self, club_id: UUID, user_id: UUID) -> bool:
        """Membership for tenant-scope checks counts either representation."""
        membership = await self.uow.memberships.get_by_user_and_club(user_id, club_id)
        if membership is not None:
            return membership.is_active
        legacy = await self.uow.memberships.get_legacy(user_id, club_id)
        return legacy is not None

    async def facility_roles(self, club_id: UUID, user_id: UUID) -> List[Role]:
        """FACILITY_ADMIN inherited from the club's facility, if any."""
        club = await self.uow.clubs.get_by_id(club_id)
        if club is None or club.facility_id is None:
            return []
        facility_membership = await self.uow.memberships.get_facility_membership(
            user_id, club.facility_id
        )
        if facility_membership is None or not facility_membership.is_active:
            return []
        roles = parse_roles(facility_membership.roles)
        return [Role.FACILITY_ADMIN] if Role.FACILITY_ADMIN in roles else []
