"""
PermissionGrant Entity

Time-boxed supplemental role elevation within a club.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from clubauthz.domain.clock import utcnow


class PermissionGrant(SQLModel, table=True):
    """
    PermissionGrant entity - temporary roles on top of standing membership.

    Business Rules:
    - Active iff now < expires_at and revoked_at is None
    - revoked_at is written once; later revocations are no-ops
    - notified_at dedupes the expiry warning across sweeper runs
    - Rows are never deleted (audit history)
    """

    __tablename__ = "permission_grants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    club_id: UUID = Field(foreign_key="clubs.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    granted_by: UUID = Field(foreign_key="users.id", nullable=False)

    roles: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    reason: Optional[str] = Field(default=None, max_length=500)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    notified_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_grant_club_user", "club_id", "user_id"),
        Index("idx_grant_expires_at", "expires_at"),
    )

    def is_active(self, now: datetime) -> bool:
        return self.revoked_at is None and now < self.expires_at
