"""
Update Member Roles Use Case

Replaces a membership's role set. The change is visible on the user's very
next request: nothing caches roles.
"""

from typing import List
from uuid import UUID

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.entities import (
    ADMIN_ROLES,
    AuditAction,
    parse_roles,
    sort_roles,
)
from clubauthz.libs.result import Error, Result, Return

from .dtos import MembershipResponse


class UpdateMemberRolesUseCase:
    """
    Business Rules:
    - Caller needs assign-role on the membership's club
    - At least one valid role is required
    - Callers cannot remove their own last admin-capable role
    - Audited as ROLE_CHANGED with before/after role sets
    """

    def __init__(self, uow: UnitOfWork, recorder: AuditRecorder):
        self.uow = uow
        self.recorder = recorder

    async def execute(
        self, auth: AuthContext, membership_id: UUID, roles: List[str]
    ) -> Result[MembershipResponse]:
        new_roles = sort_roles(parse_roles(roles))
        if not new_roles:
            return Return.err(Error("INVALID_ROLES", "Roles must be a non-empty list of valid roles"))

        async with self.uow:
            membership = await self.uow.memberships.get_by_id(membership_id)
            if membership is None:
                return Return.err(Error("MEMBERSHIP_NOT_FOUND", "Membership not found"))

            club = await self.uow.clubs.get_by_id(membership.club_id)
            instance = {
                "club_id": membership.club_id,
                "facility_id": club.facility_id if club else None,
            }
            error = authorize(
                auth, self.recorder, Action.assign_role, Subject.ClubMembership, instance, membership_id
            )
            if error:
                return Return.err(error)

            old_roles = parse_roles(membership.roles)
            if membership.user_id == auth.user_id:
                was_admin = any(role in ADMIN_ROLES for role in old_roles)
                still_admin = any(role in ADMIN_ROLES for role in new_roles)
                if was_admin and not still_admin:
                    return Return.err(
                        Error("SELF_DEMOTION", "Cannot remove your own admin role")
                    )

            membership.roles = [role.value for role in new_roles]
            membership = await self.uow.memberships.update(membership)
            await self.uow.commit()
            response = MembershipResponse.from_entity(membership)

        before = [role.value for role in old_roles]
        if set(before) != set(response.roles):
            self.recorder.record(
                auth.actor(),
                AuditEvent(
                    action=AuditAction.ROLE_CHANGED,
                    target_type="ClubMembership",
                    target_id=response.id,
                    metadata={"user_id": response.user_id, "club_id": response.club_id},
                    before_state={"roles": before},
                    after_state={"roles": response.roles},
                ),
            )
        return Return.ok(response)
