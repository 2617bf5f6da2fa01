"""
Create API Key Use Case
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from clubauthz.app.services.api_keys import generate_api_key
from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize, require_club_context
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import ApiKey, AuditAction
from clubauthz.libs.result import Error, Result, Return

from .dtos import ApiKeyCreatedResponse, ApiKeyResponse

MAX_EXPIRY_DAYS = 3650


class CreateApiKeyUseCase:
    """
    Business Rules:
    - Caller needs manage-api-keys in the current club
    - Keys cannot mint other keys
    - Only the sha256 hash is stored; the raw key is returned once
    - Expiry, when given, is 1 to MAX_EXPIRY_DAYS days
    - The key acts with its creator's roles in the club, nothing more
    """

    def __init__(
        self, uow: UnitOfWork, recorder: AuditRecorder, clock: Callable[[], datetime] = utcnow
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock

    async def execute(
        self, auth: AuthContext, name: str, expires_in_days: Optional[int] = None
    ) -> Result[ApiKeyCreatedResponse]:
        error = require_club_context(auth)
        if error:
            return Return.err(error)
        if auth.api_key_id is not None:
            return Return.err(Error("FORBIDDEN", "API keys cannot create API keys"))

        error = authorize(
            auth, self.recorder, Action.manage_api_keys, Subject.ApiKey, {"club_id": auth.club_id}
        )
        if error:
            return Return.err(error)

        name = (name or "").strip()
        if not name or len(name) > 100:
            return Return.err(Error("INVALID_NAME", "Name must be 1-100 characters"))
        if expires_in_days is not None and not 0 < expires_in_days <= MAX_EXPIRY_DAYS:
            return Return.err(
                Error("INVALID_EXPIRY", f"expires_in_days must be between 1 and {MAX_EXPIRY_DAYS}")
            )

        raw_key, key_prefix, key_hash = generate_api_key()

        async with self.uow:
            now = self.clock()
            api_key = ApiKey(
                club_id=auth.club_id,
                name=name,
                key_prefix=key_prefix,
                key_hash=key_hash,
                created_by=auth.user_id,
                expires_at=now + timedelta(days=expires_in_days) if expires_in_days else None,
                created_at=now,
            )
            api_key = await self.uow.api_keys.create(api_key)
            await self.uow.commit()
            response = ApiKeyCreatedResponse(
                **ApiKeyResponse.from_entity(api_key).model_dump(), key=raw_key
            )

        self.recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.API_KEY_CREATED,
                target_type="ApiKey",
                target_id=response.id,
                metadata={"name": name, "key_prefix": key_prefix},
            ),
        )
        return Return.ok(response)
