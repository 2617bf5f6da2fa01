"""
Sync SSO Roles Use Case

Called by the identity layer at login. Maps the IdP claims to roles and
materialises them into the user's club membership.
"""

from typing import Any, Dict
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditActor, AuditEvent, AuditRecorder
from clubauthz.app.services.sso_mapper import SsoRoleMapper
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.entities import AuditAction, ClubMembership, parse_roles, sort_roles
from clubauthz.libs.result import Error, Result, Return

from .dtos import SsoSyncResponse


class SyncSsoRolesUseCase:
    """
    Business Rules:
    - The club must belong to the facility whose SSO config applies
    - allow_override=True: manually assigned roles survive, SSO roles are
      unioned in (roles SSO granted earlier but no longer maps are dropped)
    - allow_override=False: membership roles are reset to the SSO roles
    - A missing membership is created; an inactive one stays inactive
    - Audited as ROLE_CHANGED (actor "system") when roles change
    """

    def __init__(self, uow: UnitOfWork, recorder: AuditRecorder):
        self.uow = uow
        self.recorder = recorder

    async def execute(
        self, facility_id: UUID, club_id: UUID, user_id: UUID, idp_claims: Dict[str, Any]
    ) -> Result[SsoSyncResponse]:
        async with self.uow:
            club = await self.uow.clubs.get_by_id(club_id)
            if club is None:
                return Return.err(Error("CLUB_NOT_FOUND", "Club not found"))
            if club.facility_id != facility_id:
                return Return.err(
                    Error("CONTEXT_MISMATCH", "Club does not belong to the selected facility")
                )
            if await self.uow.users.get_by_id(user_id) is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            mapped_result = await SsoRoleMapper(self.uow).map_roles(facility_id, idp_claims)
            if mapped_result.is_err():
                return mapped_result
            mapped = sort_roles(mapped_result.value)

            config = await self.uow.sso_configs.get_by_tenant(facility_id)
            allow_override = config.allow_override if config is not None else True

            membership = await self.uow.memberships.get_by_user_and_club(user_id, club_id)
            is_new = membership is None
            if is_new:
                before = []
                new_roles = mapped
                membership = ClubMembership(club_id=club_id, user_id=user_id)
            else:
                before = list(membership.roles)
                if allow_override:
                    previous_sso = set(parse_roles(membership.sso_roles))
                    manual = [role for role in parse_roles(membership.roles) if role not in previous_sso]
                    new_roles = sort_roles([*manual, *mapped])
                else:
                    new_roles = mapped

            membership.roles = [role.value for role in new_roles]
            membership.sso_roles = [role.value for role in mapped]
            if is_new:
                membership = await self.uow.memberships.create(membership)
            else:
                membership = await self.uow.memberships.update(membership)
            await self.uow.commit()

            response = SsoSyncResponse(
                membership_id=str(membership.id),
                club_id=str(club_id),
                user_id=str(user_id),
                roles=list(membership.roles),
                sso_roles=list(membership.sso_roles),
                changed=set(before) != set(membership.roles),
            )

        if response.changed:
            self.recorder.record(
                AuditActor.system(club_id),
                AuditEvent(
                    action=AuditAction.ROLE_CHANGED,
                    target_type="ClubMembership",
                    target_id=response.membership_id,
                    metadata={"user_id": str(user_id), "source": "sso"},
                    before_state={"roles": before},
                    after_state={"roles": response.roles},
                ),
            )
        return Return.ok(response)
