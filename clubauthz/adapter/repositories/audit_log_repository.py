import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.app.repositories.audit_log_repository import AuditLogFilter, IAuditLogRepository
from clubauthz.domain.entities import AuditLog


class AuditLogRepository(IAuditLogRepository):
    """AuditLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: AuditLog) -> AuditLog:
        """Create a new audit entry (immutable)"""
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def exists(self, entry_id: UUID) -> bool:
        stmt = select(AuditLog.id).where(AuditLog.id == entry_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    def _filtered(self, filters: AuditLogFilter):
        stmt = select(AuditLog)
        if filters.tenant_ids is not None:
            stmt = stmt.where(AuditLog.tenant_id.in_(filters.tenant_ids))
        if filters.action:
            stmt = stmt.where(AuditLog.action == filters.action)
        if filters.user_id:
            stmt = stmt.where(AuditLog.user_id == filters.user_id)
        if filters.start_date:
            stmt = stmt.where(AuditLog.created_at >= filters.start_date)
        if filters.end_date:
            stmt = stmt.where(AuditLog.created_at <= filters.end_date)
        return stmt

    async def list_paginated(
        self, filters: AuditLogFilter, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditLog], Optional[str]]:
        """
        List audit entries with cursor-based pagination.

        Cursor format: base64-encoded ISO timestamp of created_at
        """
        stmt = self._filtered(filters)

        if cursor:
            try:
                cursor_timestamp = datetime.fromisoformat(
                    base64.b64decode(cursor).decode("utf-8")
                )
                stmt = stmt.where(AuditLog.created_at < cursor_timestamp)
            except (ValueError, TypeError):
                # Invalid cursor, start from the beginning
                pass

        stmt = stmt.order_by(AuditLog.created_at.desc()).limit(limit + 1)
        result = await self.session.execute(stmt)
        entries = list(result.scalars().all())

        has_more = len(entries) > limit
        if has_more:
            entries = entries[:limit]

        next_cursor = None
        if has_more and entries:
            next_cursor = base64.b64encode(
                entries[-1].created_at.isoformat().encode("utf-8")
            ).decode("utf-8")

        return entries, next_cursor

    async def list_all(self, filters: AuditLogFilter) -> List[AuditLog]:
        stmt = self._filtered(filters).order_by(AuditLog.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = (
            delete(AuditLog)
            .where(AuditLog.created_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0
