from uuid import UUID

from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.entities import Role, parse_roles, sort_roles
from clubauthz.libs.result import Result, Return

from .dtos import AvailableContextsResponse, ClubOption, FacilityOption


class ListAvailableContextsUseCase:
    """Facilities the user administers and clubs the user belongs to"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[AvailableContextsResponse]:
        async with self.uow:
            facility_memberships = await self.uow.memberships.get_facility_memberships_by_user(user_id)
            admin_facility_ids = [
                membership.facility_id
                for membership in facility_memberships
                if Role.FACILITY_ADMIN in parse_roles(membership.roles)
            ]
            facilities = await self.uow.clubs.get_facilities(admin_facility_ids)

            club_roles = {}
            for membership in await self.uow.memberships.get_active_by_user(user_id):
                club_roles[membership.club_id] = sort_roles(parse_roles(membership.roles))
            for legacy in await self.uow.memberships.get_legacy_by_user(user_id):
                if legacy.team_id in club_roles:
                    continue
                current = await self.uow.memberships.get_by_user_and_club(user_id, legacy.team_id)
                if current is None:
                    club_roles[legacy.team_id] = parse_roles([legacy.role])

            clubs = await self.uow.clubs.get_many(list(club_roles))

            return Return.ok(
                AvailableContextsResponse(
                    facilities=[FacilityOption(id=str(f.id), name=f.name) for f in facilities],
                    clubs=[
                        ClubOption(
                            id=str(club.id),
                            name=club.name,
                            facility_id=str(club.facility_id) if club.facility_id else None,
                            roles=[role.value for role in club_roles[club.id]],
                        )
                        for club in clubs
                    ],
                )
            )
