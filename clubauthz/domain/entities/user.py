"""
User Entity

Represents an authenticated principal created by the identity provider.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from clubauthz.domain.clock import utcnow


class User(SQLModel, table=True):
    """
    User entity - a principal that can belong to several clubs.

    Business Rules:
    - Email must be unique across all users
    - Never hard-deleted; admins soft-ban via is_banned / banned_until
    - A ban with banned_until in the past no longer blocks access
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)

    mfa_enabled: bool = Field(default=False)

    is_banned: bool = Field(default=False)
    banned_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_is_banned", "is_banned"),)

    def is_blocked(self, now: datetime) -> bool:
        if not self.is_banned:
            return False
        return self.banned_until is None or now < self.banned_until
