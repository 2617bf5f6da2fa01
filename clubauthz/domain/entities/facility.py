"""
Facility Entity

Coarse tenant that groups several clubs (e.g. a shared boathouse).
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from clubauthz.domain.clock import utcnow


class Facility(SQLModel, table=True):
    __tablename__ = "facilities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=100)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
