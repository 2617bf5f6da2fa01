from datetime import datetime
from typing import Callable

from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize, require_club_context
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.clock import utcnow
from clubauthz.libs.result import Result, Return

from .dtos import GrantListResponse, GrantResponse


class ListGrantsUseCase:
    """Grants of the current club; revoked ones never, expired ones on request"""

    def __init__(
        self, uow: UnitOfWork, recorder: AuditRecorder, clock: Callable[[], datetime] = utcnow
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock

    async def execute(self, auth: AuthContext, include_expired: bool = False) -> Result[GrantListResponse]:
        error = require_club_context(auth)
        if error:
            return Return.err(error)
        error = authorize(
            auth, self.recorder, Action.read, Subject.PermissionGrant, {"club_id": auth.club_id}
        )
        if error:
            return Return.err(error)

        async with self.uow:
            now = self.clock()
            grants = await self.uow.grants.list_for_club(auth.club_id, now, include_expired)
            return Return.ok(
                GrantListResponse(grants=[GrantResponse.from_entity(grant, now) for grant in grants])
            )
