"""
Load Authorization Context Use Case

Resolves, for one request, which tenant the principal is acting in and
what the principal may do there.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from clubauthz.app.services.audit_recorder import ClientInfo
from clubauthz.app.services.auth_context import AuthContext, ContextHint
from clubauthz.app.services.effective_roles import EffectiveRolesService
from clubauthz.app.services.role_resolver import RoleResolver
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import TenantContext, build_ability
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import ContextScope, Role, parse_roles
from clubauthz.libs.result import Error, Result, Return


class LoadAuthContextUseCase:
    """
    Business Rules:
    - The principal is reloaded on every request; a banned or unknown user
      gets the generic UNAUTHORIZED error
    - The context hint is re-verified against storage; an invalid hint falls
      back to the first active membership (was_recovered=True)
    - A pinned hint (API key) never falls back to another tenant
    - API-key requests never carry the creator's super-admin bypass
    - Roles and ability are recomputed from storage, never cached
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        user_id: UUID,
        hint: Optional[ContextHint] = None,
        pinned: bool = False,
        client: Optional[ClientInfo] = None,
        api_key_id: Optional[UUID] = None,
    ) -> Result[AuthContext]:
        async with self.uow:
            now = self.clock()
            user = await self.uow.users.get_by_id(user_id)
            if user is None or user.is_blocked(now):
                return Return.err(Error("UNAUTHORIZED", "Unauthorized"))

            is_super_admin = (
                api_key_id is None
                and await self.uow.super_admins.get_by_user_id(user_id) is not None
            )
            resolver = RoleResolver(self.uow)

            selected = None
            if hint is not None:
                if await self._is_selectable(resolver, user_id, hint, is_super_admin):
                    selected = hint
                elif pinned:
                    selected = hint

            was_recovered = hint is not None and selected is None
            if selected is None:
                selected = await self._default_context(user_id)

            context = AuthContext(
                user_id=user_id,
                ability=build_ability([], None, is_super_admin),
                is_super_admin=is_super_admin,
                was_recovered=was_recovered,
                api_key_id=api_key_id,
                client=client or ClientInfo(),
            )
            if selected is None:
                return Return.ok(context)

            if selected.scope == ContextScope.facility:
                roles = [Role.FACILITY_ADMIN]
                tenant_context = TenantContext(
                    user_id=user_id,
                    scope=ContextScope.facility,
                    facility_id=selected.tenant_id,
                )
                context.scope = ContextScope.facility
                context.facility_id = selected.tenant_id
            else:
                club = await self.uow.clubs.get_by_id(selected.tenant_id)
                effective = await EffectiveRolesService(self.uow, self.clock).effective_roles(
                    selected.tenant_id, user_id, now
                )
                roles = effective.roles
                linked = []
                if Role.PARENT in roles:
                    linked = await self.uow.memberships.get_linked_athlete_ids(
                        user_id, selected.tenant_id
                    )
                tenant_context = TenantContext(
                    user_id=user_id,
                    scope=ContextScope.club,
                    club_id=selected.tenant_id,
                    facility_id=club.facility_id if club else None,
                    linked_athlete_ids=frozenset(str(athlete) for athlete in linked),
                )
                context.scope = ContextScope.club
                context.club_id = selected.tenant_id
                context.facility_id = tenant_context.facility_id

            context.roles = roles
            context.ability = build_ability(roles, tenant_context, is_super_admin)
            return Return.ok(context)

    async def _is_selectable(
        self, resolver: RoleResolver, user_id: UUID, hint: ContextHint, is_super_admin: bool
    ) -> bool:
        if hint.scope == ContextScope.facility:
            if is_super_admin:
                return await self.uow.clubs.get_facility(hint.tenant_id) is not None
            membership = await self.uow.memberships.get_facility_membership(
                user_id, hint.tenant_id
            )
            return membership is not None and Role.FACILITY_ADMIN in parse_roles(membership.roles)

        if await self.uow.clubs.get_by_id(hint.tenant_id) is None:
            return False
        if is_super_admin or await resolver.has_membership(hint.tenant_id, user_id):
            return True
        return bool(await resolver.facility_roles(hint.tenant_id, user_id))

    async def _default_context(self, user_id: UUID) -> Optional[ContextHint]:
        memberships = await self.uow.memberships.get_active_by_user(user_id)
        if memberships:
            return ContextHint(ContextScope.club, memberships[0].club_id)

        for legacy in await self.uow.memberships.get_legacy_by_user(user_id):
            # A current row, even a deactivated one, shadows the legacy row
            current = await self.uow.memberships.get_by_user_and_club(user_id, legacy.team_id)
            if current is None:
                return ContextHint(ContextScope.club, legacy.team_id)

        for facility_membership in await self.uow.memberships.get_facility_memberships_by_user(
            user_id
        ):
            if Role.FACILITY_ADMIN in parse_roles(facility_membership.roles):
                return ContextHint(ContextScope.facility, facility_membership.facility_id)
        return None
