from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from clubauthz.domain.entities import ClubMembership, FacilityMembership, TeamMember


class IMembershipRepository(ABC):
    """
    Membership repository interface - application layer

    Covers the current ClubMembership rows, the read-only legacy TeamMember
    rows and FacilityMembership rows.
    """

    @abstractmethod
    async def get_by_id(self, membership_id: UUID) -> Optional[ClubMembership]:
        """Get club membership by ID"""
        pass

    @abstractmethod
    async def get_by_user_and_club(
        self, user_id: UUID, club_id: UUID
    ) -> Optional[ClubMembership]:
        """Get club membership for a pair, active or not"""
        pass

    @abstractmethod
    async def get_active_by_user(self, user_id: UUID) -> List[ClubMembership]:
        """Get all active club memberships for a user, oldest first"""
        pass

    @abstractmethod
    async def create(self, membership: ClubMembership) -> ClubMembership:
        """Create a new club membership"""
        pass

    @abstractmethod
    async def update(self, membership: ClubMembership) -> ClubMembership:
        """Update existing club membership"""
        pass

    @abstractmethod
    async def get_legacy(self, user_id: UUID, club_id: UUID) -> Optional[TeamMember]:
        """Get legacy single-role membership for a pair"""
        pass

    @abstractmethod
    async def get_legacy_by_user(self, user_id: UUID) -> List[TeamMember]:
        """Get all legacy memberships for a user"""
        pass

    @abstractmethod
    async def get_facility_membership(
        self, user_id: UUID, facility_id: UUID
    ) -> Optional[FacilityMembership]:
        """Get active facility membership for a pair"""
        pass

    @abstractmethod
    async def get_facility_memberships_by_user(
        self, user_id: UUID
    ) -> List[FacilityMembership]:
        """Get all active facility memberships for a user"""
        pass

    @abstractmethod
    async def get_linked_athlete_ids(self, user_id: UUID, club_id: UUID) -> List[UUID]:
        """Get athlete IDs linked to a parent within a club"""
        pass
