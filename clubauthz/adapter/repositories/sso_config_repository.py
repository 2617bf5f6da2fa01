from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.app.repositories.sso_config_repository import ISsoConfigRepository
from clubauthz.domain.entities import SsoConfig


class SsoConfigRepository(ISsoConfigRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_tenant(self, tenant_id: UUID) -> Optional[SsoConfig]:
        stmt = select(SsoConfig).where(SsoConfig.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, config: SsoConfig) -> SsoConfig:
        """Insert or update the tenant's config"""
        self.session.add(config)
        await self.session.flush()
        await self.session.refresh(config)
        return config
