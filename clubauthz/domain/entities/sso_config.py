"""
SsoConfig Entity

Per-tenant identity-provider settings and group-to-role mappings.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from clubauthz.domain.clock import utcnow

from .enums import Role


class SsoConfig(SQLModel, table=True):
    """
    SsoConfig entity.

    role_mappings is an ordered list of {"idp_value": str, "roles": [Role]}.
    """

    __tablename__ = "sso_configs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(unique=True, index=True)

    enabled: bool = Field(default=False)
    provider_id: Optional[str] = Field(default=None, max_length=255)
    idp_domain: Optional[str] = Field(default=None, max_length=255)
    group_claim: str = Field(default="groups", max_length=100)

    role_mappings: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    default_role: str = Field(default=Role.ATHLETE.value, max_length=32)
    allow_override: bool = Field(default=True)

    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
