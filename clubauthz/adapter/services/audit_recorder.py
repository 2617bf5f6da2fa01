"""
Background audit writer

Each record() call schedules its own asyncio task with its own database
session, so the caller's transaction never waits on (or rolls back with)
the audit write.
"""

import asyncio
import logging
from typing import Callable, Set

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.adapter.repositories.audit_log_repository import AuditLogRepository
from clubauthz.app.services.audit_recorder import AuditActor, AuditEvent, AuditRecorder
from clubauthz.domain.entities import AuditLog

logger = logging.getLogger(__name__)


class BackgroundAuditRecorder(AuditRecorder):
    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        retries: int = 3,
        retry_delay: float = 0.2,
    ):
        self.session_factory = session_factory
        self.retries = max(1, retries)
        self.retry_delay = retry_delay
        self._pending: Set[asyncio.Task] = set()

    def record(self, actor: AuditActor, event: AuditEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(
                f"Audit event {event.event_id} ({event.action.value}) dropped: no running event loop"
            )
            return
        task = loop.create_task(self._write(actor, event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _write(self, actor: AuditActor, event: AuditEvent) -> None:
        for attempt in range(1, self.retries + 1):
            try:
                async with self.session_factory() as session:
                    repo = AuditLogRepository(session)
                    # A previous attempt may have committed before failing
                    if await repo.exists(event.event_id):
                        return
                    await repo.create(self._to_entry(actor, event))
                    await session.commit()
                return
            except IntegrityError:
                # Primary key already taken: the event is written
                return
            except Exception as exc:
                logger.warning(
                    f"Audit write attempt {attempt}/{self.retries} failed for "
                    f"{event.event_id} ({event.action.value}): {exc}"
                )
                if attempt < self.retries:
                    await asyncio.sleep(self.retry_delay * attempt)

        logger.error(
            f"Audit event dropped after {self.retries} attempts: "
            f"id={event.event_id} action={event.action.value} tenant={actor.tenant_id} "
            f"user={actor.user_id}"
        )

    @staticmethod
    def _to_entry(actor: AuditActor, event: AuditEvent) -> AuditLog:
        return AuditLog(
            id=event.event_id,
            tenant_id=actor.tenant_id,
            user_id=actor.user_id,
            action=event.action.value,
            target_type=event.target_type,
            target_id=event.target_id,
            event_metadata=event.full_metadata(),
            ip_address=actor.ip_address,
            user_agent=actor.user_agent,
        )
