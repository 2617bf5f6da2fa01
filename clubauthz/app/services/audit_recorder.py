"""
Audit Recorder contract

record() must never raise into the caller and must never delay it: the
write happens out of band, and failures are only logged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from clubauthz.domain.entities import PLATFORM_TENANT, SYSTEM_ACTOR, AuditAction


@dataclass(frozen=True)
class ClientInfo:
    """Where a request came from"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_request(cls, request) -> "ClientInfo":
        headers = request.headers
        forwarded = headers.get("x-forwarded-for")
        if forwarded:
            ip_address = forwarded.split(",")[0].strip() or None
        else:
            ip_address = headers.get("x-real-ip")
        return cls(ip_address=ip_address, user_agent=headers.get("user-agent"))


@dataclass(frozen=True)
class AuditActor:
    """Who performed the action and from where"""

    tenant_id: str
    user_id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def for_tenant(cls, tenant_id, user_id, client: Optional[ClientInfo] = None) -> "AuditActor":
        client = client or ClientInfo()
        return cls(str(tenant_id), str(user_id), client.ip_address, client.user_agent)

    @classmethod
    def platform(cls, user_id, client: Optional[ClientInfo] = None) -> "AuditActor":
        return cls.for_tenant(PLATFORM_TENANT, user_id, client)

    @classmethod
    def system(cls, tenant_id) -> "AuditActor":
        return cls(str(tenant_id), SYSTEM_ACTOR)

    @classmethod
    def from_request(cls, request, tenant_id, user_id) -> "AuditActor":
        return cls.for_tenant(tenant_id, user_id, ClientInfo.from_request(request))


@dataclass(frozen=True)
class AuditEvent:
    """What happened"""

    action: AuditAction
    target_type: str
    target_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    before_state: Optional[Dict[str, Any]] = None
    after_state: Optional[Dict[str, Any]] = None
    event_id: UUID = field(default_factory=uuid4)

    def full_metadata(self) -> Dict[str, Any]:
        data = dict(self.metadata)
        if self.before_state is not None or self.after_state is not None:
            data["before_state"] = self.before_state
            data["after_state"] = self.after_state
        return data


class AuditRecorder(ABC):
    @abstractmethod
    def record(self, actor: AuditActor, event: AuditEvent) -> None:
        """Schedule an append; returns immediately"""
        pass

    @abstractmethod
    async def drain(self) -> None:
        """Wait for scheduled writes to finish"""
        pass
