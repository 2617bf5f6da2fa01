"""
Authenticate API Key Use Case

Resolves a raw API key to the club it is scoped to and the user who
created it. The key carries no capability of its own.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID

from clubauthz.app.services.api_keys import API_KEY_PREFIX, hash_api_key
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.clock import utcnow
from clubauthz.libs.result import Error, Result, Return


@dataclass(frozen=True)
class ApiKeyPrincipal:
    key_id: UUID
    club_id: UUID
    user_id: UUID


class AuthenticateApiKeyUseCase:
    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, raw_key: str) -> Result[ApiKeyPrincipal]:
        if not raw_key or not raw_key.startswith(API_KEY_PREFIX):
            return Return.err(Error("UNAUTHORIZED", "Unauthorized"))

        async with self.uow:
            now = self.clock()
            api_key = await self.uow.api_keys.get_by_hash(hash_api_key(raw_key))
            if api_key is None or not api_key.is_usable(now):
                return Return.err(Error("UNAUTHORIZED", "Unauthorized"))

            principal = ApiKeyPrincipal(api_key.id, api_key.club_id, api_key.created_by)
            await self.uow.api_keys.touch(api_key.id, now)
            await self.uow.commit()
            return Return.ok(principal)
