from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from clubauthz.domain.entities import SsoConfig


class ISsoConfigRepository(ABC):
    """SsoConfig repository interface - application layer"""

    @abstractmethod
    async def get_by_tenant(self, tenant_id: UUID) -> Optional[SsoConfig]:
        """Get SSO config for a tenant"""
        pass

    @abstractmethod
    async def save(self, config: SsoConfig) -> SsoConfig:
        """Create or update SSO config"""
        pass
