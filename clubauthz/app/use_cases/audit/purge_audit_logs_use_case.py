"""
Purge Audit Logs Use Case

Retention job: deletes entries older than the retention horizon. This is
the only path that ever deletes audit entries.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

from clubauthz.app.services.audit_recorder import AuditActor, AuditEvent, AuditRecorder
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import PLATFORM_TENANT, AuditAction
from clubauthz.libs.result import Result, Return

from .dtos import PurgeAuditLogsResponse

logger = logging.getLogger(__name__)


class PurgeAuditLogsUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        recorder: AuditRecorder,
        clock: Callable[[], datetime] = utcnow,
        retention_days: int = 365,
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock
        self.retention_days = retention_days

    async def execute(self) -> Result[PurgeAuditLogsResponse]:
        cutoff = self.clock() - timedelta(days=self.retention_days)
        async with self.uow:
            deleted = await self.uow.audit_logs.delete_older_than(cutoff)
            await self.uow.commit()

        logger.info(f"Audit retention: deleted {deleted} entries older than {cutoff.isoformat()}")
        if deleted:
            self.recorder.record(
                AuditActor.system(PLATFORM_TENANT),
                AuditEvent(
                    action=AuditAction.AUDIT_LOGS_PURGED,
                    target_type="AuditLog",
                    metadata={
                        "deleted": deleted,
                        "cutoff": cutoff.isoformat(),
                        "retention_days": self.retention_days,
                    },
                ),
            )
        return Return.ok(PurgeAuditLogsResponse(deleted=deleted, cutoff=cutoff))
