"""
SuperAdmin Entity

Platform-wide privilege. Rows are only inserted by the seeding script.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from clubauthz.domain.clock import utcnow


class SuperAdmin(SQLModel, table=True):
    __tablename__ = "super_admins"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", unique=True, index=True)
    created_by: Optional[UUID] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
