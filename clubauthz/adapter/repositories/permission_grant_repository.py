from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.app.repositories.permission_grant_repository import IPermissionGrantRepository
from clubauthz.domain.entities import PermissionGrant


class PermissionGrantRepository(IPermissionGrantRepository):
    """PermissionGrant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, grant_id: UUID) -> Optional[PermissionGrant]:
        """Get grant by ID"""
        stmt = select(PermissionGrant).where(PermissionGrant.id == grant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, grant: PermissionGrant) -> PermissionGrant:
        """Create a new grant"""
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant

    async def list_for_club(
        self, club_id: UUID, now: datetime, include_expired: bool = False
    ) -> List[PermissionGrant]:
        stmt = select(PermissionGrant).where(
            PermissionGrant.club_id == club_id,
            PermissionGrant.revoked_at.is_(None),
        )
        if not include_expired:
            stmt = stmt.where(PermissionGrant.expires_at > now)
        stmt = stmt.order_by(PermissionGrant.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_active_for_user(
        self, club_id: UUID, user_id: UUID, now: datetime
    ) -> List[PermissionGrant]:
        stmt = (
            select(PermissionGrant)
            .where(
                PermissionGrant.club_id == club_id,
                PermissionGrant.user_id == user_id,
                PermissionGrant.revoked_at.is_(None),
                PermissionGrant.expires_at > now,
            )
            .order_by(PermissionGrant.expires_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def revoke(self, grant_id: UUID, now: datetime) -> bool:
        """Compare-and-set: only the first caller sees True"""
        return await self._set_if_null(grant_id, "revoked_at", now)

    async def get_expiring(self, now: datetime, within_hours: int) -> List[PermissionGrant]:
        threshold = now + timedelta(hours=within_hours)
        stmt = (
            select(PermissionGrant)
            .where(
                PermissionGrant.expires_at > now,
                PermissionGrant.expires_at <= threshold,
                PermissionGrant.revoked_at.is_(None),
                PermissionGrant.notified_at.is_(None),
            )
            .order_by(PermissionGrant.expires_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_notified(self, grant_ids: List[UUID], now: datetime) -> List[UUID]:
        marked = []
        for grant_id in grant_ids:
            if await self._set_if_null(grant_id, "notified_at", now):
                marked.append(grant_id)
        return marked

    async def get_expired(self, now: datetime) -> List[PermissionGrant]:
        stmt = (
            select(PermissionGrant)
            .where(
                PermissionGrant.expires_at <= now,
                PermissionGrant.revoked_at.is_(None),
            )
            .order_by(PermissionGrant.expires_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def bulk_revoke_expired(self, grant_ids: List[UUID], now: datetime) -> List[UUID]:
        revoked = []
        for grant_id in grant_ids:
            if await self._set_if_null(grant_id, "revoked_at", now):
                revoked.append(grant_id)
        return revoked

    async def _set_if_null(self, grant_id: UUID, column: str, now: datetime) -> bool:
        # One conditional UPDATE per row so the rowcount tells exactly which
        # rows this transaction claimed.
        target = getattr(PermissionGrant, column)
        stmt = (
            update(PermissionGrant)
            .where(PermissionGrant.id == grant_id, target.is_(None))
            .values({column: now})
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
