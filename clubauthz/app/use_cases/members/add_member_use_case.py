"""
Add Member Use Case
"""

from typing import List, Optional
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.entities import AuditAction, ClubMembership, parse_roles, sort_roles
from clubauthz.libs.result import Error, Result, Return

from .dtos import MembershipResponse


class AddMemberUseCase:
    """
    Business Rules:
    - Caller needs invite-member on ClubMembership for the club
    - An already active membership is a conflict, never silently merged
    - An inactive membership is reactivated in place (one row per pair)
    - Audited as MEMBER_INVITED
    """

    def __init__(self, uow: UnitOfWork, recorder: AuditRecorder):
        self.uow = uow
        self.recorder = recorder

    async def execute(
        self,
        auth: AuthContext,
        user_id: UUID,
        roles: List[str],
        club_id: Optional[UUID] = None,
    ) -> Result[MembershipResponse]:
        club_id = club_id or auth.club_id
        if club_id is None:
            return Return.err(Error("NO_CLUB_CONTEXT", "Select a club before performing this action"))

        new_roles = sort_roles(parse_roles(roles))
        if not new_roles:
            return Return.err(Error("INVALID_ROLES", "Roles must be a non-empty list of valid roles"))

        async with self.uow:
            club = await self.uow.clubs.get_by_id(club_id)
            instance = {"club_id": club_id, "facility_id": club.facility_id if club else None}
            error = authorize(
                auth, self.recorder, Action.invite_member, Subject.ClubMembership, instance, user_id
            )
            if error:
                return Return.err(error)
            if club is None:
                return Return.err(Error("CLUB_NOT_FOUND", "Club not found"))

            if await self.uow.users.get_by_id(user_id) is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            membership = await self.uow.memberships.get_by_user_and_club(user_id, club_id)
            reactivated = False
            if membership is not None:
                if membership.is_active:
                    return Return.err(
                        Error("MEMBER_ALREADY_ACTIVE", "User is already an active member of this club")
                    )
                membership.is_active = True
                membership.roles = [role.value for role in new_roles]
                membership = await self.uow.memberships.update(membership)
                reactivated = True
            else:
                membership = await self.uow.memberships.create(
                    ClubMembership(
                        club_id=club_id,
                        user_id=user_id,
                        roles=[role.value for role in new_roles],
                    )
                )

            await self.uow.commit()
            response = MembershipResponse.from_entity(membership)

        self.recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.MEMBER_INVITED,
                target_type="ClubMembership",
                target_id=response.id,
                metadata={
                    "user_id": str(user_id),
                    "club_id": str(club_id),
                    "roles": response.roles,
                    "reactivated": reactivated,
                },
            ),
        )
        return Return.ok(response)
