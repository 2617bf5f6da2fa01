"""
Revoke Permission Grant Use Case
"""

from datetime import datetime
from typing import Callable
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize
from clubauthz.app.services.notifications import GRANT_REVOKED, NotificationPublisher
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction
from clubauthz.libs.result import Error, Result, Return

from .dtos import RevokeGrantResponse


class RevokeGrantUseCase:
    """
    Business Rules:
    - Caller needs delete PermissionGrant on the grant's club
    - revoked_at is compare-and-set; revoking twice is a successful no-op
    - Only the call that actually revoked audits PERMISSION_GRANT_REVOKED
    """

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

    async def execute(self, auth: AuthContext, grant_id: UUID) -> Result[RevokeGrantResponse]:
        async with self.uow:
            grant = await self.uow.grants.get_by_id(grant_id)
            if grant is None:
                return Return.err(Error("GRANT_NOT_FOUND", "Permission grant not found"))

            error = authorize(
                auth, self.recorder, Action.delete, Subject.PermissionGrant, grant, grant_id
            )
            if error:
                return Return.err(error)

            if grant.revoked_at is not None:
                return Return.ok(RevokeGrantResponse(grant_id=str(grant_id), status="already_revoked"))

            club_id = grant.club_id
            user_id = grant.user_id
            roles = list(grant.roles)

            revoked = await self.uow.grants.revoke(grant_id, self.clock())
            await self.uow.commit()

        if not revoked:
            # A concurrent revoke (admin or sweeper) won the race
            return Return.ok(RevokeGrantResponse(grant_id=str(grant_id), status="already_revoked"))

        self.recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.PERMISSION_GRANT_REVOKED,
                target_type="PermissionGrant",
                target_id=str(grant_id),
                metadata={"user_id": str(user_id), "roles": roles},
            ),
        )
        await self.notifier.publish(
            GRANT_REVOKED,
            {
                "grant_id": str(grant_id),
                "club_id": str(club_id),
                "user_id": str(user_id),
                "roles": roles,
            },
        )
        return Return.ok(RevokeGrantResponse(grant_id=str(grant_id), status="revoked"))
