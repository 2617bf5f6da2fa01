from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from clubauthz.domain.entities import AUDIT_ACTION_DESCRIPTIONS, AuditAction, AuditLog


def describe_action(action: str) -> str:
    try:
        return AUDIT_ACTION_DESCRIPTIONS.get(AuditAction(action), action)
    except ValueError:
        return action


class AuditLogEntryResponse(BaseModel):
    id: str
    tenant_id: str
    user_id: str
    action: str
    action_description: str
    target_type: str
    target_id: Optional[str] = None
    metadata: Dict[str, Any]
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, entry: AuditLog) -> "AuditLogEntryResponse":
        return cls(
            id=str(entry.id),
            tenant_id=entry.tenant_id,
            user_id=entry.user_id,
            action=entry.action,
            action_description=describe_action(entry.action),
            target_type=entry.target_type,
            target_id=entry.target_id,
            metadata=entry.event_metadata or {},
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )


class AuditLogListResponse(BaseModel):
    entries: List[AuditLogEntryResponse]
    next_cursor: Optional[str] = None


class AuditExport(BaseModel):
    filename: str
    content: str
    record_count: int


class PurgeAuditLogsResponse(BaseModel):
    deleted: int
    cutoff: datetime
