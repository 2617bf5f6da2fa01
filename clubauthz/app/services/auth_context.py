"""
Per-request authorization context

Built from storage on every request; nothing here outlives the request.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditActor, ClientInfo
from clubauthz.domain.ability import Ability
from clubauthz.domain.entities import PLATFORM_TENANT, ContextScope, Role


@dataclass(frozen=True)
class ContextHint:
    """
    Client-side remembered selection (cookie or header).

    Serialized as "<scope>:<tenant uuid>". It is only a hint: the loader
    re-verifies membership before using it.
    """

    scope: ContextScope
    tenant_id: UUID

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ContextHint"]:
        if not value:
            return None
        scope, _, raw_id = value.partition(":")
        if not raw_id:
            # A bare id is a club selection
            scope, raw_id = ContextScope.club.value, scope
        try:
            return cls(ContextScope(scope), UUID(raw_id))
        except ValueError:
            return None

    def serialize(self) -> str:
        return f"{self.scope.value}:{self.tenant_id}"


@dataclass
class AuthContext:
    user_id: UUID
    ability: Ability
    scope: Optional[ContextScope] = None
    club_id: Optional[UUID] = None
    facility_id: Optional[UUID] = None
    roles: List[Role] = field(default_factory=list)
    is_super_admin: bool = False
    was_recovered: bool = False
    api_key_id: Optional[UUID] = None
    client: ClientInfo = field(default_factory=ClientInfo)

    @property
    def tenant_id(self) -> Optional[UUID]:
        if self.scope == ContextScope.facility:
            return self.facility_id
        return self.club_id

    def actor(self) -> AuditActor:
        tenant = self.tenant_id if self.tenant_id is not None else PLATFORM_TENANT
        return AuditActor.for_tenant(tenant, self.user_id, self.client)
