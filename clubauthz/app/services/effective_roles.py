"""
Effective-Roles Aggregator

effective = standing membership roles | facility roles | active grant roles
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional
from uuid import UUID

from clubauthz.app.services.role_resolver import RoleResolver
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.clock import utcnow
from clubauthz.domain.entities import Role, RoleSource, parse_roles, sort_roles


@dataclass
class EffectiveRoles:
    roles: List[Role] = field(default_factory=list)
    membership_roles: List[Role] = field(default_factory=list)
    facility_roles: List[Role] = field(default_factory=list)
    granted_roles: List[Role] = field(default_factory=list)
    source: RoleSource = RoleSource.none

    @property
    def is_empty(self) -> bool:
        return not self.roles


class EffectiveRolesService:
    """
    Purely additive: no source can remove a role contributed by another.
    Recomputed from storage on every call.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock
        self.resolver = RoleResolver(uow)

    async def effective_roles(
        self, club_id: UUID, user_id: UUID, now: Optional[datetime] = None
    ) -> EffectiveRoles:
        now = now or self.clock()

        resolved = await self.resolver.resolve_roles(club_id, user_id)
        facility_roles = await self.resolver.facility_roles(club_id, user_id)

        grants = await self.uow.grants.list_active_for_user(club_id, user_id, now)
        granted: List[Role] = []
        for grant in grants:
            # The query filters already; re-check so a clock skew between
            # the store and this process cannot widen the window.
            if grant.is_active(now):
                granted.extend(parse_roles(grant.roles))

        return EffectiveRoles(
            roles=sort_roles([*resolved.roles, *facility_roles, *granted]),
            membership_roles=resolved.roles,
            facility_roles=facility_roles,
            granted_roles=sort_roles(granted),
            source=resolved.source,
        )
