from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from clubauthz.domain.entities import Club, Facility


class IClubRepository(ABC):
    """Club and facility lookups - application layer"""

    @abstractmethod
    async def get_by_id(self, club_id: UUID) -> Optional[Club]:
        """Get club by ID"""
        pass

    @abstractmethod
    async def get_many(self, club_ids: List[UUID]) -> List[Club]:
        """Get clubs by IDs"""
        pass

    @abstractmethod
    async def get_facility(self, facility_id: UUID) -> Optional[Facility]:
        """Get facility by ID"""
        pass

    @abstractmethod
    async def get_facilities(self, facility_ids: List[UUID]) -> List[Facility]:
        """Get facilities by IDs"""
        pass

    @abstractmethod
    async def get_by_facility(self, facility_id: UUID) -> List[Club]:
        """Clubs that belong to a facility"""
        pass
