from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.app.repositories.membership_repository import IMembershipRepository
from clubauthz.domain.entities import (
    ClubMembership,
    FacilityMembership,
    ParentAthleteLink,
    TeamMember,
)


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, membership_id: UUID) -> Optional[ClubMembership]:
        """Get membership by ID"""
        stmt = select(ClubMembership).where(ClubMembership.id == membership_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_and_club(
        self, user_id: UUID, club_id: UUID
    ) -> Optional[ClubMembership]:
        """Get membership by user and club, active or not"""
        stmt = select(ClubMembership).where(
            ClubMembership.user_id == user_id,
            ClubMembership.club_id == club_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_user(self, user_id: UUID) -> List[ClubMembership]:
        """Active memberships of a user, oldest first"""
        stmt = (
            select(ClubMembership)
            .where(ClubMembership.user_id == user_id, ClubMembership.is_active == True)  # noqa: E712
            .order_by(ClubMembership.joined_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, membership: ClubMembership) -> ClubMembership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: ClubMembership) -> ClubMembership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def get_legacy(self, user_id: UUID, club_id: UUID) -> Optional[TeamMember]:
        stmt = select(TeamMember).where(
            TeamMember.user_id == user_id,
            TeamMember.team_id == club_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_legacy_by_user(self, user_id: UUID) -> List[TeamMember]:
        stmt = (
            select(TeamMember)
            .where(TeamMember.user_id == user_id)
            .order_by(TeamMember.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_facility_membership(
        self, user_id: UUID, facility_id: UUID
    ) -> Optional[FacilityMembership]:
        stmt = select(FacilityMembership).where(
            FacilityMembership.user_id == user_id,
            FacilityMembership.facility_id == facility_id,
            FacilityMembership.is_active == True,  # noqa: E712
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_facility_memberships_by_user(
        self, user_id: UUID
    ) -> List[FacilityMembership]:
        stmt = (
            select(FacilityMembership)
            .where(
                FacilityMembership.user_id == user_id,
                FacilityMembership.is_active == True,  # noqa: E712
            )
            .order_by(FacilityMembership.joined_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_linked_athlete_ids(self, user_id: UUID, club_id: UUID) -> List[UUID]:
        stmt = select(ParentAthleteLink.athlete_id).where(
            ParentAthleteLink.parent_user_id == user_id,
            ParentAthleteLink.club_id == club_id,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
