"""
Seed Super Admin Use Case

Out-of-band bootstrap only: invoked by the seed script with a raw user id.
No HTTP route reaches it.
"""

from uuid import UUID

from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.entities import SuperAdmin
from clubauthz.libs.result import Error, Result, Return

from .dtos import SeedSuperAdminResponse


class SeedSuperAdminUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[SeedSuperAdminResponse]:
        async with self.uow:
            if await self.uow.users.get_by_id(user_id) is None:
                return Return.err(Error("USER_NOT_FOUND", f"User {user_id} not found"))

            if await self.uow.super_admins.get_by_user_id(user_id) is not None:
                return Return.ok(
                    SeedSuperAdminResponse(user_id=str(user_id), status="already_super_admin")
                )

            await self.uow.super_admins.create(SuperAdmin(user_id=user_id))
            await self.uow.commit()
            return Return.ok(SeedSuperAdminResponse(user_id=str(user_id), status="created"))
