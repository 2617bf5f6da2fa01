from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.app.repositories.club_repository import IClubRepository
from clubauthz.domain.entities import Club, Facility


class ClubRepository(IClubRepository):
    """Club and Facility lookups using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, club_id: UUID) -> Optional[Club]:
        stmt = select(Club).where(Club.id == club_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, club_ids: List[UUID]) -> List[Club]:
        if not club_ids:
            return []
        stmt = select(Club).where(Club.id.in_(club_ids)).order_by(Club.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_facility(self, facility_id: UUID) -> Optional[Facility]:
        stmt = select(Facility).where(Facility.id == facility_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_facilities(self, facility_ids: List[UUID]) -> List[Facility]:
        if not facility_ids:
            return []
        stmt = select(Facility).where(Facility.id.in_(facility_ids)).order_by(Facility.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_facility(self, facility_id: UUID) -> List[Club]:
        stmt = select(Club).where(Club.facility_id == facility_id).order_by(Club.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
