from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from clubauthz.domain.entities import ApiKey


class IApiKeyRepository(ABC):
    """ApiKey repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, key_id: UUID) -> Optional[ApiKey]:
        """Get API key by ID"""
        pass

    @abstractmethod
    async def get_by_hash(self, key_hash: str) -> Optional[ApiKey]:
        """Get API key by sha256 hash"""
        pass

    @abstractmethod
    async def list_active_for_club(self, club_id: UUID) -> List[ApiKey]:
        """List non-revoked keys for a club, newest first"""
        pass

    @abstractmethod
    async def create(self, api_key: ApiKey) -> ApiKey:
        """Create a new API key"""
        pass

    @abstractmethod
    async def update(self, api_key: ApiKey) -> ApiKey:
        """Update existing API key"""
        pass

    @abstractmethod
    async def touch(self, key_id: UUID, now: datetime) -> None:
        """Record last use"""
        pass
