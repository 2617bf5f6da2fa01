from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize, require_club_context
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.libs.result import Result, Return

from .dtos import ApiKeyListResponse, ApiKeyResponse


class ListApiKeysUseCase:
    def __init__(self, uow: UnitOfWork, recorder: AuditRecorder):
        self.uow = uow
        self.recorder = recorder

    async def execute(self, auth: AuthContext) -> Result[ApiKeyListResponse]:
        error = require_club_context(auth)
        if error:
            return Return.err(error)
        error = authorize(
            auth, self.recorder, Action.manage_api_keys, Subject.ApiKey, {"club_id": auth.club_id}
        )
        if error:
            return Return.err(error)

        async with self.uow:
            keys = await self.uow.api_keys.list_active_for_club(auth.club_id)
            return Return.ok(
                ApiKeyListResponse(api_keys=[ApiKeyResponse.from_entity(key) for key in keys])
            )
