from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from clubauthz.domain.entities import SuperAdmin


class ISuperAdminRepository(ABC):
    """SuperAdmin repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[SuperAdmin]:
        """Get super admin record for a user"""
        pass

    @abstractmethod
    async def list_all(self) -> List[SuperAdmin]:
        """List all super admins"""
        pass

    @abstractmethod
    async def create(self, super_admin: SuperAdmin) -> SuperAdmin:
        """Insert a super admin record (seeding script only)"""
        pass
