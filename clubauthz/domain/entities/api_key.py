"""
ApiKey Entity

Club-scoped key that acts with its creator's roles. Only the sha256 hash
is stored; the raw key is shown once at creation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from clubauthz.domain.clock import utcnow


class ApiKey(SQLModel, table=True):
    __tablename__ = "api_keys"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    club_id: UUID = Field(foreign_key="clubs.id", nullable=False, index=True)
    name: str = Field(max_length=100)
    key_prefix: str = Field(max_length=16)
    key_hash: str = Field(unique=True, index=True, max_length=64)
    created_by: UUID = Field(foreign_key="users.id", nullable=False)

    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    def is_usable(self, now: datetime) -> bool:
        if self.revoked_at is not None:
            return False
        return self.expires_at is None or now < self.expires_at
