"""
TeamMember Entity

Legacy single-role membership. Rows are read-only: new memberships are
always written as ClubMembership, and a ClubMembership for the same pair
takes precedence when both exist.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from clubauthz.domain.clock import utcnow


class TeamMember(SQLModel, table=True):
    __tablename__ = "team_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    team_id: UUID = Field(foreign_key="clubs.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    role: str = Field(max_length=32)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_team_member_team_user", "team_id", "user_id", unique=True),)
