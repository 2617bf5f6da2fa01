"""
Create Permission Grant Use Case

Grants a member extra roles in the current club for a bounded time.
"""

from datetime import datetime, timedelta
from typing import Callable, List, Optional, Union
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize, require_club_context
from clubauthz.app.services.notifications import GRANT_CREATED, NotificationPublisher
from clubauthz.app.services.role_resolver import RoleResolver
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction, PermissionGrant, parse_roles, sort_roles
from clubauthz.libs.result import Error, Result, Return

from .dtos import GrantResponse, parse_duration_hours


class CreateGrantUseCase:
    """
    Business Rules:
    - Caller needs create PermissionGrant in the club (club admins)
    - At least one valid role is required
    - 0 < duration <= max_duration_hours
    - Target must be a member of the club (current or legacy row)
    - expires_at = now + duration
    - Audited as PERMISSION_GRANT_CREATED, then a grant.created notification
    """

    def __init__(
        self,
        uow: UnitOfWork,
        recorder: AuditRecorder,
        notifier: NotificationPublisher,
        clock: Callable[[], datetime] = utcnow,
        max_duration_hours: int = 720,
    ):
        self.uow = uow
        self.recorder = recorder
        self.notifier = notifier
        self.clock = clock
        self.max_duration_hours = max_duration_hours

    async def execute(
        self,
        auth: AuthContext,
        user_id: UUID,
        roles: List[str],
        duration: Union[str, int, float, None],
        reason: Optional[str] = None,
    ) -> Result[GrantResponse]:
        error = require_club_context(auth)
        if error:
            return Return.err(error)
        club_id = auth.club_id

        error = authorize(
            auth, self.recorder, Action.create, Subject.PermissionGrant, {"club_id": club_id}
        )
        if error:
            return Return.err(error)

        granted_roles = sort_roles(parse_roles(roles))
        if not granted_roles or len(granted_roles) != len(set(roles or [])):
            return Return.err(Error("INVALID_ROLES", "Roles must be a non-empty list of valid roles"))

        hours = parse_duration_hours(duration)
        if hours is None:
            return Return.err(Error("INVALID_DURATION", "Duration must be a positive number of hours or a preset"))
        if hours > self.max_duration_hours:
            return Return.err(
                Error(
                    "DURATION_TOO_LONG",
                    f"Duration cannot exceed {self.max_duration_hours} hours",
                )
            )

        async with self.uow:
            if not await RoleResolver(self.uow).has_membership(club_id, user_id):
                return Return.err(Error("MEMBER_NOT_FOUND", "User is not a member of this club"))

            now = self.clock()
            grant = PermissionGrant(
                club_id=club_id,
                user_id=user_id,
                granted_by=auth.user_id,
                roles=[role.value for role in granted_roles],
                reason=reason,
                expires_at=now + timedelta(hours=hours),
                created_at=now,
            )
            grant = await self.uow.grants.create(grant)
            await self.uow.commit()

            response = GrantResponse.from_entity(grant, now)

        self.recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.PERMISSION_GRANT_CREATED,
                target_type="PermissionGrant",
                target_id=response.id,
                metadata={
                    "user_id": str(user_id),
                    "roles": response.roles,
                    "expires_at": response.expires_at.isoformat(),
                    "reason": reason,
                },
            ),
        )
        await self.notifier.publish(
            GRANT_CREATED,
            {
                "grant_id": response.id,
                "club_id": str(club_id),
                "user_id": str(user_id),
                "roles": response.roles,
                "expires_at": response.expires_at.isoformat(),
            },
        )
        return Return.ok(response)
