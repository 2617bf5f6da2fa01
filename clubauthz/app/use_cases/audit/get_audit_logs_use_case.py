"""
Get Audit Logs Use Case

Retrieves audit entries visible to the caller with pagination.
"""

from datetime import datetime
from typing import Optional

from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.libs.result import Result, Return

from .audit_scope import resolve_audit_filter
from .dtos import AuditLogEntryResponse, AuditLogListResponse


class GetAuditLogsUseCase:
    """
    Business Rules:
    - Results are scoped to what the caller may view (see audit_scope)
    - Newest first, cursor-based pagination
    - Each entry carries a human readable action description
    """

    def __init__(self, uow: UnitOfWork, recorder: AuditRecorder):
        self.uow = uow
        self.recorder = recorder

    async def execute(
        self,
        auth: AuthContext,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[AuditLogListResponse]:
        async with self.uow:
            filter_result = await resolve_audit_filter(
                self.uow, self.recorder, auth, action, user_id, start_date, end_date
            )
            if filter_result.is_err():
                return filter_result

            entries, next_cursor = await self.uow.audit_logs.list_paginated(
                filter_result.value, limit=limit, cursor=cursor
            )
            return Return.ok(
                AuditLogListResponse(
                    entries=[AuditLogEntryResponse.from_entity(entry) for entry in entries],
                    next_cursor=next_cursor,
                )
            )
