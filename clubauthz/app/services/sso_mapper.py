"""
SSO Role Mapper

Translates identity-provider group claims into club roles at login time.
Does not persist anything; callers materialise the result.
"""

from typing import Any, Dict, List
from uuid import UUID

from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.entities import Role, SsoConfig, parse_roles
from clubauthz.libs.result import Error, Result, Return

DEFAULT_SSO_ROLE = Role.ATHLETE


def _claim_groups(value: Any) -> Result[List[str]]:
    if value is None:
        return Return.ok([])
    if isinstance(value, str):
        return Return.ok([value])
    if isinstance(value, (list, tuple)):
        return Return.ok([str(item) for item in value])
    return Return.err(
        Error("INVALID_SSO_CLAIM", "Group claim must be a string or a list of strings")
    )


def map_claims(config: SsoConfig, idp_claims: Dict[str, Any]) -> Result[List[Role]]:
    """Apply an SSO config to a claim set."""
    default_roles = parse_roles([config.default_role]) or [DEFAULT_SSO_ROLE]
    if not config.enabled:
        return Return.ok(default_roles)

    groups_result = _claim_groups(idp_claims.get(config.group_claim))
    if groups_result.is_err():
        return groups_result
    groups = set(groups_result.value)

    mapped: List[Role] = []
    for mapping in config.role_mappings or []:
        if mapping.get("idp_value") not in groups:
            continue
        for role in parse_roles(mapping.get("roles")):
            if role not in mapped:
                mapped.append(role)

    return Return.ok(mapped or default_roles)


class SsoRoleMapper:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def map_roles(self, tenant_id: UUID, idp_claims: Dict[str, Any]) -> Result[List[Role]]:
        config = await self.uow.sso_configs.get_by_tenant(tenant_id)
        if config is None:
            return Return.ok([DEFAULT_SSO_ROLE])
        return map_claims(config, idp_claims)
