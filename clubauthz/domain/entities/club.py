"""
Club Entity

The unit of data isolation; optionally belongs to a facility.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from clubauthz.domain.clock import utcnow


class Club(SQLModel, table=True):
    __tablename__ = "clubs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=100)

    facility_id: Optional[UUID] = Field(default=None, foreign_key="facilities.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
