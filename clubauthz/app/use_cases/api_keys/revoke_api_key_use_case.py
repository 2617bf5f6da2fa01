from datetime import datetime
from typing import Callable
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction
from clubauthz.libs.result import Error, Result, Return

from .dtos import RevokeApiKeyResponse


class RevokeApiKeyUseCase:
    """Revoking an already revoked key is a no-op"""

    def __init__(
        self, uow: UnitOfWork, recorder: AuditRecorder, clock: Callable[[], datetime] = utcnow
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock

    async def execute(self, auth: AuthContext, key_id: UUID) -> Result[RevokeApiKeyResponse]:
        async with self.uow:
            api_key = await self.uow.api_keys.get_by_id(key_id)
            if api_key is None:
                return Return.err(Error("API_KEY_NOT_FOUND", "API key not found"))

            error = authorize(
                auth, self.recorder, Action.manage_api_keys, Subject.ApiKey, api_key, key_id
            )
            if error:
                return Return.err(error)

            if api_key.revoked_at is not None:
                return Return.ok(RevokeApiKeyResponse(id=str(key_id), status="already_revoked"))

            api_key.revoked_at = self.clock()
            await self.uow.api_keys.update(api_key)
            await self.uow.commit()
            key_prefix = api_key.key_prefix

        self.recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.API_KEY_REVOKED,
                target_type="ApiKey",
                target_id=str(key_id),
                metadata={"key_prefix": key_prefix},
            ),
        )
        return Return.ok(RevokeApiKeyResponse(id=str(key_id), status="revoked"))
