"""
Deactivate / Reactivate User Use Cases

Platform-level soft ban. Users are never hard-deleted.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditActor, AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.entities import AuditAction, User
from clubauthz.libs.result import Error, Result, Return

from .dtos import UserStatusResponse


def _state(user: User) -> dict:
    return {
        "is_banned": user.is_banned,
        "banned_until": user.banned_until.isoformat() if user.banned_until else None,
    }


class _SetUserStatusUseCase:
    action: AuditAction

    def __init__(self, uow: UnitOfWork, recorder: AuditRecorder):
        self.uow = uow
        self.recorder = recorder

    def _apply(self, user: User, banned_until: Optional[datetime]) -> None:
        raise NotImplementedError

    async def _execute(
        self,
        auth: AuthContext,
        user_id: UUID,
        banned_until: Optional[datetime] = None,
        reason: Optional[str] = None,
    ) -> Result[UserStatusResponse]:
        if not auth.is_super_admin:
            return Return.err(Error("FORBIDDEN", "Super admin access required"))
        if user_id == auth.user_id:
            return Return.err(Error("CANNOT_MODIFY_SELF", "You cannot change your own account status"))

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            before = _state(user)
            self._apply(user, banned_until)
            user = await self.uow.users.update(user)
            await self.uow.commit()
            after = _state(user)

        self.recorder.record(
            AuditActor.platform(auth.user_id, auth.client),
            AuditEvent(
                action=self.action,
                target_type="User",
                target_id=str(user_id),
                metadata={"reason": reason} if reason else {},
                before_state=before,
                after_state=after,
            ),
        )
        return Return.ok(
            UserStatusResponse(
                user_id=str(user_id),
                is_banned=after["is_banned"],
                banned_until=user.banned_until,
            )
        )


class DeactivateUserUseCase(_SetUserStatusUseCase):
    """Bans a user, optionally until a point in time"""

    action = AuditAction.ADMIN_USER_DEACTIVATED

    def _apply(self, user: User, banned_until: Optional[datetime]) -> None:
        user.is_banned = True
        user.banned_until = banned_until

    async def execute(
        self,
        auth: AuthContext,
        user_id: UUID,
        banned_until: Optional[datetime] = None,
        reason: Optional[str] = None,
    ) -> Result[UserStatusResponse]:
        return await self._execute(auth, user_id, banned_until, reason)


class ReactivateUserUseCase(_SetUserStatusUseCase):
    action = AuditAction.ADMIN_USER_REACTIVATED

    def _apply(self, user: User, banned_until: Optional[datetime]) -> None:
        user.is_banned = False
        user.banned_until = None

    async def execute(
        self, auth: AuthContext, user_id: UUID, reason: Optional[str] = None
    ) -> Result[UserStatusResponse]:
        return await self._execute(auth, user_id, None, reason)
