from abc import ABC, abstractmethod

from clubauthz.app.repositories.api_key_repository import IApiKeyRepository
from clubauthz.app.repositories.audit_log_repository import IAuditLogRepository
from clubauthz.app.repositories.club_repository import IClubRepository
from clubauthz.app.repositories.membership_repository import IMembershipRepository
from clubauthz.app.repositories.permission_grant_repository import IPermissionGrantRepository
from clubauthz.app.repositories.sso_config_repository import ISsoConfigRepository
from clubauthz.app.repositories.super_admin_repository import ISuperAdminRepository
from clubauthz.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    clubs: IClubRepository
    memberships: IMembershipRepository
    grants: IPermissionGrantRepository
    audit_logs: IAuditLogRepository
    sso_configs: ISsoConfigRepository
    super_admins: ISuperAdminRepository
    api_keys: IApiKeyRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
