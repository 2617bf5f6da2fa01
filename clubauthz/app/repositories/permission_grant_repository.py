from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from clubauthz.domain.entities import PermissionGrant


class IPermissionGrantRepository(ABC):
    """
    PermissionGrant repository interface - application layer

    revoked_at and notified_at are written with compare-and-set semantics:
    the conditional update only touches rows where the column is still NULL,
    and the returned ids/booleans say which rows this caller actually changed.
    """

    @abstractmethod
    async def get_by_id(self, grant_id: UUID) -> Optional[PermissionGrant]:
        """Get grant by ID"""
        pass

    @abstractmethod
    async def create(self, grant: PermissionGrant) -> PermissionGrant:
        """Create a new grant"""
        pass

    @abstractmethod
    async def list_for_club(
        self, club_id: UUID, now: datetime, include_expired: bool = False
    ) -> List[PermissionGrant]:
        """
        List grants in a club, newest first.

        Revoked grants are always excluded; expired ones only unless
        include_expired is set.
        """
        pass

    @abstractmethod
    async def list_active_for_user(
        self, club_id: UUID, user_id: UUID, now: datetime
    ) -> List[PermissionGrant]:
        """Active grants for a user in a club, soonest expiry first"""
        pass

    @abstractmethod
    async def revoke(self, grant_id: UUID, now: datetime) -> bool:
        """Set revoked_at if still NULL. Returns True if this call revoked it."""
        pass

    @abstractmethod
    async def get_expiring(
        self, now: datetime, within_hours: int
    ) -> List[PermissionGrant]:
        """Active, un-notified grants expiring within the window"""
        pass

    @abstractmethod
    async def mark_notified(self, grant_ids: List[UUID], now: datetime) -> List[UUID]:
        """Set notified_at where still NULL. Returns the ids actually marked."""
        pass

    @abstractmethod
    async def get_expired(self, now: datetime) -> List[PermissionGrant]:
        """Grants past expires_at that are not revoked yet"""
        pass

    @abstractmethod
    async def bulk_revoke_expired(self, grant_ids: List[UUID], now: datetime) -> List[UUID]:
        """Revoke the given grants where still NULL. Returns the ids actually revoked."""
        pass
