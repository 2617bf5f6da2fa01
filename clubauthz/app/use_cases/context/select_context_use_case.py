"""
Select Context Use Case

Switches the tenant a user acts in. Selection is a capability check, not a
cookie write: membership is re-verified before the scope is granted.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditActor, AuditEvent, AuditRecorder, ClientInfo
from clubauthz.app.services.auth_context import ContextHint
from clubauthz.app.services.effective_roles import EffectiveRolesService
from clubauthz.app.services.role_resolver import RoleResolver
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import AuditAction, ContextScope, Role, parse_roles
from clubauthz.libs.result import Error, Result, Return

from .dtos import SelectedContext


class SelectContextUseCase:
    """
    Business Rules:
    - Facility scope requires an active FacilityMembership holding FACILITY_ADMIN
    - Club scope requires an active membership (current or legacy), or
      FACILITY_ADMIN of the club's facility (read-only drill-down)
    - A club that does not belong to the requested facility is rejected as
      CONTEXT_MISMATCH, never silently corrected
    - Audited as CONTEXT_SWITCHED
    """

    def __init__(
        self, uow: UnitOfWork, recorder: AuditRecorder, clock: Callable[[], datetime] = utcnow
    ):
        self.uow = uow
        self.recorder = recorder
        self.clock = clock

    async def execute(
        self,
        user_id: UUID,
        facility_id: Optional[UUID] = None,
        club_id: Optional[UUID] = None,
        client: Optional[ClientInfo] = None,
    ) -> Result[SelectedContext]:
        if facility_id is None and club_id is None:
            return Return.err(Error("INVALID_CONTEXT", "A facility or club must be selected"))

        async with self.uow:
            is_super_admin = await self.uow.super_admins.get_by_user_id(user_id) is not None

            if club_id is None:
                facility = await self.uow.clubs.get_facility(facility_id)
                membership = await self.uow.memberships.get_facility_membership(user_id, facility_id)
                is_facility_admin = membership is not None and Role.FACILITY_ADMIN in parse_roles(
                    membership.roles
                )
                if facility is None or not (is_facility_admin or is_super_admin):
                    return Return.err(
                        Error("FORBIDDEN", "You are not an administrator of this facility")
                    )
                selected = SelectedContext(
                    scope=ContextScope.facility.value,
                    tenant_id=str(facility_id),
                    facility_id=str(facility_id),
                    roles=[Role.FACILITY_ADMIN.value],
                    hint=ContextHint(ContextScope.facility, facility_id).serialize(),
                )
            else:
                club = await self.uow.clubs.get_by_id(club_id)
                if club is None:
                    return Return.err(Error("FORBIDDEN", "You are not a member of this club"))
                if facility_id is not None and club.facility_id != facility_id:
                    return Return.err(
                        Error("CONTEXT_MISMATCH", "Club does not belong to the selected facility")
                    )

                resolver = RoleResolver(self.uow)
                allowed = (
                    is_super_admin
                    or await resolver.has_membership(club_id, user_id)
                    or bool(await resolver.facility_roles(club_id, user_id))
                )
                if not allowed:
                    return Return.err(Error("FORBIDDEN", "You are not a member of this club"))

                effective = await EffectiveRolesService(self.uow, self.clock).effective_roles(
                    club_id, user_id
                )
                selected = SelectedContext(
                    scope=ContextScope.club.value,
                    tenant_id=str(club_id),
                    facility_id=str(club.facility_id) if club.facility_id else None,
                    club_id=str(club_id),
                    roles=[role.value for role in effective.roles],
                    hint=ContextHint(ContextScope.club, club_id).serialize(),
                )

        self.recorder.record(
            AuditActor.for_tenant(selected.tenant_id, user_id, client),
            AuditEvent(
                action=AuditAction.CONTEXT_SWITCHED,
                target_type="Facility" if club_id is None else "Team",
                target_id=selected.tenant_id,
                metadata={
                    "scope": selected.scope,
                    "facility_id": selected.facility_id,
                    "club_id": selected.club_id,
                },
            ),
        )
        return Return.ok(selected)
