"""
Update SSO Config Use Case
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction, Role, SsoConfig, parse_roles
from clubauthz.libs.result import Error, Result, Return

from .dtos import SsoConfigResponse


def _snapshot(config: SsoConfig) -> Dict[str, Any]:
    return {
        "enabled": config.enabled,
        "provider_id": config.provider_id,
        "idp_domain": config.idp_domain,
        "group_claim": config.group_claim,
        "role_mappings": [dict(mapping) for mapping in config.role_mappings or []],
        "default_role": config.default_role,
        "allow_override": config.allow_override,
    }


def normalize_mappings(mappings: List[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    """Validate the mapping table; unknown role names are dropped. None when malformed."""
    normalized = []
    for mapping in mappings or []:
        idp_value = mapping.get("idp_value") if isinstance(mapping, dict) else None
        roles = mapping.get("roles") if isinstance(mapping, dict) else None
        if not isinstance(idp_value, str) or not idp_value.strip():
            return None
        if not isinstance(roles, list):
            return None
        normalized.append(
            {"idp_value": idp_value.strip(), "roles": [role.value for role in parse_roles(roles)]}
        )
    return normalized


class UpdateSsoConfigUseCase:
    """
    Business Rules:
    - Caller needs update SsoConfig on the facility (facility admins)
    - default_role must be a valid role; mappings must be well formed
    - Audited as SSO_CONFIG_UPDATED with before/after snapshots, plus
      SSO_ENABLED / SSO_DISABLED and SSO_ROLE_MAPPING_CHANGED when relevant
    """

    def __init__(
        self, uow: UnitOfWork, recorder: AuditRecorder, clock: Callable[[], datetime] = utcnow
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock

    async def execute(
        self,
        auth: AuthContext,
        facility_id: UUID,
        enabled: bool,
        role_mappings: List[Dict[str, Any]],
        provider_id: Optional[str] = None,
        idp_domain: Optional[str] = None,
        group_claim: str = "groups",
        default_role: str = Role.ATHLETE.value,
        allow_override: bool = True,
    ) -> Result[SsoConfigResponse]:
        instance = {"tenant_id": facility_id, "facility_id": facility_id}
        error = authorize(auth, self.recorder, Action.update, Subject.SsoConfig, instance, facility_id)
        if error:
            return Return.err(error)

        if not parse_roles([default_role]):
            return Return.err(Error("INVALID_ROLE", f"Invalid default role: {default_role}"))
        if not group_claim or not group_claim.strip():
            return Return.err(Error("INVALID_GROUP_CLAIM", "Group claim name is required"))
        mappings = normalize_mappings(role_mappings)
        if mappings is None:
            return Return.err(
                Error("INVALID_ROLE_MAPPING", "Each mapping needs an idp_value and a list of roles")
            )

        async with self.uow:
            if await self.uow.clubs.get_facility(facility_id) is None:
                return Return.err(Error("FACILITY_NOT_FOUND", "Facility not found"))

            config = await self.uow.sso_configs.get_by_tenant(facility_id)
            if config is None:
                config = SsoConfig(tenant_id=facility_id)
            before = _snapshot(config)

            config.enabled = enabled
            config.provider_id = provider_id
            config.idp_domain = idp_domain
            config.group_claim = group_claim.strip()
            config.role_mappings = mappings
            config.default_role = default_role
            config.allow_override = allow_override
            config.updated_at = self.clock()

            config = await self.uow.sso_configs.save(config)
            await self.uow.commit()

            after = _snapshot(config)
            response = SsoConfigResponse.from_entity(config)

        actor = auth.actor()
        target = str(facility_id)
        self.recorder.record(
            actor,
            AuditEvent(
                action=AuditAction.SSO_CONFIG_UPDATED,
                target_type="SsoConfig",
                target_id=target,
                before_state=before,
                after_state=after,
            ),
        )
        if before["enabled"] != after["enabled"]:
            self.recorder.record(
                actor,
                AuditEvent(
                    action=AuditAction.SSO_ENABLED if enabled else AuditAction.SSO_DISABLED,
                    target_type="SsoConfig",
                    target_id=target,
                ),
            )
        if before["role_mappings"] != after["role_mappings"]:
            self.recorder.record(
                actor,
                AuditEvent(
                    action=AuditAction.SSO_ROLE_MAPPING_CHANGED,
                    target_type="SsoConfig",
                    target_id=target,
                    before_state={"role_mappings": before["role_mappings"]},
                    after_state={"role_mappings": after["role_mappings"]},
                ),
            )
        return Return.ok(response)
