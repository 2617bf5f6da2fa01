from sqlmodel.ext.asyncio.session import AsyncSession

from clubauthz.adapter.repositories.api_key_repository import ApiKeyRepository
from clubauthz.adapter.repositories.audit_log_repository import AuditLogRepository
from clubauthz.adapter.repositories.club_repository import ClubRepository
from clubauthz.adapter.repositories.membership_repository import MembershipRepository
from clubauthz.adapter.repositories.permission_grant_repository import PermissionGrantRepository
from clubauthz.adapter.repositories.sso_config_repository import SsoConfigRepository
from clubauthz.adapter.repositories.super_admin_repository import SuperAdminRepository
from clubauthz.adapter.repositories.user_repository import UserRepository
from clubauthz.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.users = UserRepository(self.session)
        self.clubs = ClubRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.grants = PermissionGrantRepository(self.session)
        self.audit_logs = AuditLogRepository(self.session)
        self.sso_configs = SsoConfigRepository(self.session)
        self.super_admins = SuperAdminRepository(self.session)
        self.api_keys = ApiKeyRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
