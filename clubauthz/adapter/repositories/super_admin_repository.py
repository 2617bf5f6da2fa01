from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.app.repositories.super_admin_repository import ISuperAdminRepository
from clubauthz.domain.entities import SuperAdmin


class SuperAdminRepository(ISuperAdminRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[SuperAdmin]:
        stmt = select(SuperAdmin).where(SuperAdmin.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[SuperAdmin]:
        stmt = select(SuperAdmin).order_by(SuperAdmin.created_at)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, super_admin: SuperAdmin) -> SuperAdmin:
        self.session.add(super_admin)
        await self.session.flush()
        await self.session.refresh(super_admin)
        return super_admin
