from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from clubauthz.domain.entities import SsoConfig


class RoleMapping(BaseModel):
    idp_value: str
    roles: List[str]


class SsoConfigResponse(BaseModel):
    tenant_id: str
    enabled: bool
    provider_id: Optional[str] = None
    idp_domain: Optional[str] = None
    group_claim: str
    role_mappings: List[RoleMapping]
    default_role: str
    allow_override: bool
    updated_at: datetime

    @classmethod
    def from_entity(cls, config: SsoConfig) -> "SsoConfigResponse":
        return cls(
            tenant_id=str(config.tenant_id),
            enabled=config.enabled,
            provider_id=config.provider_id,
            idp_domain=config.idp_domain,
            group_claim=config.group_claim,
            role_mappings=[RoleMapping(**mapping) for mapping in config.role_mappings],
            default_role=config.default_role,
            allow_override=config.allow_override,
            updated_at=config.updated_at,
        )


class SsoSyncResponse(BaseModel):
    membership_id: str
    club_id: str
    user_id: str
    roles: List[str]
    sso_roles: List[str]
    changed: bool
