"""
FacilityMembership Entity

Binding of a user to a facility; only used to grant FACILITY_ADMIN across
the clubs of that facility.
"""

from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from clubauthz.domain.clock import utcnow


class FacilityMembership(SQLModel, table=True):
    __tablename__ = "facility_memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    facility_id: UUID = Field(foreign_key="facilities.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    roles: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_active: bool = Field(default=True)

    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_facility_membership_facility_user", "facility_id", "user_id", unique=True),
    )
