"""
Export Audit Logs Use Case

Renders visible audit entries as CSV. Exporting is itself audited.
"""

import csv
import io
import json
from datetime import datetime
from typing import Callable, Optional

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction
from clubauthz.libs.result import Result, Return

from .audit_scope import resolve_audit_filter
from .dtos import AuditExport, describe_action

CSV_HEADERS = [
    "ID",
    "Timestamp",
    "Action",
    "Action Description",
    "User ID",
    "Target Type",
    "Target ID",
    "Club ID",
    "IP Address",
    "User Agent",
    "Metadata",
]


class ExportAuditLogsUseCase:
    def __init__(
        self, uow: UnitOfWork, recorder: AuditRecorder, clock: Callable[[], datetime] = utcnow
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock

    async def execute(
        self,
        auth: AuthContext,
        action: Optional[str] = None,
        user_id: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> Result[AuditExport]:
        async with self.uow:
            filter_result = await resolve_audit_filter(
                self.uow, self.recorder, auth, action, user_id, start_date, end_date
            )
            if filter_result.is_err():
                return filter_result

            entries = await self.uow.audit_logs.list_all(filter_result.value)

            buffer = io.StringIO()
            writer = csv.writer(buffer)
            writer.writerow(CSV_HEADERS)
            for entry in entries:
                writer.writerow(
                    [
                        str(entry.id),
                        entry.created_at.isoformat(),
                        entry.action,
                        describe_action(entry.action),
                        entry.user_id,
                        entry.target_type,
                        entry.target_id or "",
                        entry.tenant_id,
                        entry.ip_address or "",
                        entry.user_agent or "",
                        json.dumps(entry.event_metadata or {}, sort_keys=True),
                    ]
                )
            record_count = len(entries)

        self.recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.DATA_EXPORTED,
                target_type="AuditLog",
                metadata={
                    "filters": {
                        "action": action,
                        "user_id": user_id,
                        "start_date": start_date.isoformat() if start_date else None,
                        "end_date": end_date.isoformat() if end_date else None,
                    },
                    "record_count": record_count,
                },
            ),
        )

        filename = f"audit-logs-{self.clock().strftime('%Y-%m-%d')}.csv"
        return Return.ok(
            AuditExport(filename=filename, content=buffer.getvalue(), record_count=record_count)
        )
