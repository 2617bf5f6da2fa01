from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.libs.result import Error, Result, Return

from .dtos import SuperAdminListResponse, SuperAdminResponse


class ListSuperAdminsUseCase:
    """The super-admin table is readable by super admins only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, auth: AuthContext) -> Result[SuperAdminListResponse]:
        if not auth.is_super_admin:
            return Return.err(Error("FORBIDDEN", "Super admin access required"))

        async with self.uow:
            admins = await self.uow.super_admins.list_all()
            items = []
            for admin in admins:
                user = await self.uow.users.get_by_id(admin.user_id)
                items.append(
                    SuperAdminResponse(
                        user_id=str(admin.user_id),
                        email=user.email if user else None,
                        created_by=str(admin.created_by) if admin.created_by else None,
                        created_at=admin.created_at,
                    )
                )
            return Return.ok(SuperAdminListResponse(super_admins=items))
