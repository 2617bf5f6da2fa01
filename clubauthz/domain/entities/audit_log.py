"""
AuditLog Entity

Append-only record of security-relevant actions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from clubauthz.domain.clock import utcnow


class AuditLog(SQLModel, table=True):
    """
    AuditLog entity - immutable trail of who did what to what, from where.

    Business Rules:
    - Never updated; rows older than the retention horizon are purged
    - tenant_id is a club id or the PLATFORM sentinel
    - user_id is a user id or "system" for scheduled actions
    - id is assigned before the write so retries cannot double-insert
    """

    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: str = Field(max_length=64, index=True)
    user_id: str = Field(max_length=64, index=True)

    action: str = Field(max_length=100)
    target_type: str = Field(max_length=100)
    target_id: Optional[str] = Field(default=None, max_length=64)

    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_log_created_at", "created_at"),
        Index("idx_audit_log_tenant_action", "tenant_id", "action"),
    )
