"""
ClubMembership Entity

Current multi-role binding of a user to a club.
"""

from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from clubauthz.domain.clock import utcnow


class ClubMembership(SQLModel, table=True):
    """
    ClubMembership entity - links a User to a Club with an ordered set of roles.

    Business Rules:
    - (club_id, user_id) must be unique; reactivation flips is_active
    - Roles are not mutually exclusive
    - sso_roles keeps the roles last materialised from the identity provider
    - roles lists are replaced, never mutated in place (JSON column)
    """

    __tablename__ = "club_memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    club_id: UUID = Field(foreign_key="clubs.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)

    roles: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    sso_roles: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_active: bool = Field(default=True)

    joined_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_club_membership_club_user", "club_id", "user_id", unique=True),
        Index("idx_club_membership_active", "is_active"),
    )
