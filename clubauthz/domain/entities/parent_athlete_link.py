"""
ParentAthleteLink Entity

Relationship used by the PARENT role to see linked athletes only.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index, SQLModel


class ParentAthleteLink(SQLModel, table=True):
    __tablename__ = "parent_athlete_links"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    club_id: UUID = Field(foreign_key="clubs.id", nullable=False, index=True)
    parent_user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    athlete_id: UUID = Field(nullable=False)

    __table_args__ = (
        Index("idx_parent_link_unique", "club_id", "parent_user_id", "athlete_id", unique=True),
    )
