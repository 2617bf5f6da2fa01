from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from clubauthz.domain.entities import AuditLog


@dataclass
class AuditLogFilter:
    """Filters applied when listing or exporting audit entries"""

    tenant_ids: Optional[List[str]] = None
    action: Optional[str] = None
    user_id: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class IAuditLogRepository(ABC):
    """AuditLog repository interface - application layer"""

    @abstractmethod
    async def create(self, entry: AuditLog) -> AuditLog:
        """Append an audit entry (immutable)"""
        pass

    @abstractmethod
    async def exists(self, entry_id: UUID) -> bool:
        """Whether an entry with this id was already written"""
        pass

    @abstractmethod
    async def list_paginated(
        self, filters: AuditLogFilter, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditLog], Optional[str]]:
        """
        List entries newest first with cursor-based pagination.

        Returns:
            Tuple of (entries, next_cursor); next_cursor is None on the last page
        """
        pass

    @abstractmethod
    async def list_all(self, filters: AuditLogFilter) -> List[AuditLog]:
        """List every matching entry newest first (export)"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Retention purge. Returns the number of deleted entries."""
        pass
