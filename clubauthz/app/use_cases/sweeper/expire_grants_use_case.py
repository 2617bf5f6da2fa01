"""
Expire Permission Grants Use Case

Two-phase sweep invoked by the external scheduler:
1. Warn about grants expiring within the warning window (once per grant)
2. Revoke grants past expiry and audit each one

Safe to run more often than scheduled and concurrently with an admin's
explicit revoke: notified_at and revoked_at are compare-and-set columns and
only ids this run actually changed produce events.
"""

import logging
from datetime import datetime
from typing import Callable

from pydantic import BaseModel

from clubauthz.app.services.audit_recorder import AuditActor, AuditEvent, AuditRecorder
from clubauthz.app.services.notifications import (
    GRANT_EXPIRED,
    GRANT_EXPIRING,
    NotificationPublisher,
)
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction
from clubauthz.libs.result import Result, Return

logger = logging.getLogger(__name__)


class ExpireGrantsResponse(BaseModel):
    warned: int
    expired: int


class ExpireGrantsUseCase:
    def __init__(
        self,
        uow: UnitOfWork,
        recorder: AuditRecorder,
        notifier: NotificationPublisher,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.recorder = recorder
        self.notifier = notifier
        self.clock = clock

    async def execute(self, warning_hours: int = 24) -> Result[ExpireGrantsResponse]:
        async with self.uow:
            now = self.clock()

            # Phase 1: expiry warnings
            expiring = await self.uow.grants.get_expiring(now, warning_hours)
            marked = set(await self.uow.grants.mark_notified([g.id for g in expiring], now))
            warnings = [
                {
                    "grant_id": str(grant.id),
                    "club_id": str(grant.club_id),
                    "user_id": str(grant.user_id),
                    "roles": list(grant.roles),
                    "expires_at": grant.expires_at.isoformat(),
                    "hours_remaining": round((grant.expires_at - now).total_seconds() / 3600, 1),
                }
                for grant in expiring
                if grant.id in marked
            ]
            await self.uow.commit()

        # notified_at is committed, so a later sweep will not warn again
        for payload in warnings:
            await self._publish(GRANT_EXPIRING, payload)

        async with self.uow:
            # Phase 2: revoke what is past expiry
            expired = await self.uow.grants.get_expired(now)
            revoked = set(await self.uow.grants.bulk_revoke_expired([g.id for g in expired], now))
            expirations = [grant for grant in expired if grant.id in revoked]
            await self.uow.commit()

        for grant in expirations:
            self.recorder.record(
                AuditActor.system(grant.club_id),
                AuditEvent(
                    action=AuditAction.PERMISSION_GRANT_EXPIRED,
                    target_type="PermissionGrant",
                    target_id=str(grant.id),
                    metadata={
                        "expired_user_id": str(grant.user_id),
                        "roles": list(grant.roles),
                        "expires_at": grant.expires_at.isoformat(),
                    },
                ),
            )

        for grant in expirations:
            await self._publish(
                GRANT_EXPIRED,
                {
                    "grant_id": str(grant.id),
                    "club_id": str(grant.club_id),
                    "user_id": str(grant.user_id),
                    "roles": list(grant.roles),
                },
            )

        logger.info(f"Grant sweep: warned={len(warnings)} expired={len(expirations)}")
        return Return.ok(ExpireGrantsResponse(warned=len(warnings), expired=len(expirations)))

    async def _publish(self, event_type: str, payload: dict) -> None:
        try:
            await self.notifier.publish(event_type, payload)
        except Exception as e:
            logger.error(
                f"Failed to publish {event_type} for grant {payload['grant_id']}: {e}",
                exc_info=True,
            )
