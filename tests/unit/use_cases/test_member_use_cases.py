from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.use_cases.members import UpdateMemberRolesUseCase
from clubauthz.domain.entities import AuditAction, Club, ClubMembership


@pytest.fixture
def roles_uow(mock_uow):
    mock_uow.memberships.update = AsyncMock(side_effect=lambda membership: membership)
    return mock_uow


def with_membership(uow, membership):
    uow.memberships.get_by_id = AsyncMock(return_value=membership)
    uow.clubs.get_by_id = AsyncMock(
        return_value=Club(id=membership.club_id, name="River", slug="river")
    )


@pytest.mark.asyncio
async def test_admin_changes_member_roles_with_before_after_audit(roles_uow, recorder, make_auth):
    auth = make_auth(["CLUB_ADMIN"])
    membership = ClubMembership(club_id=auth.club_id, user_id=uuid4(), roles=["ATHLETE"])
    with_membership(roles_uow, membership)

    result = await UpdateMemberRolesUseCase(roles_uow, recorder).execute(
        auth, membership.id, ["COACH", "ATHLETE"]
    )

    assert result.value.roles == ["COACH", "ATHLETE"]
    roles_uow.commit.assert_called_once()
    event = recorder.record.call_args.args[1]
    assert event.action == AuditAction.ROLE_CHANGED
    assert event.before_state == {"roles": ["ATHLETE"]}
    assert event.after_state == {"roles": ["COACH", "ATHLETE"]}


@pytest.mark.asyncio
async def test_admin_cannot_demote_self(roles_uow, recorder, make_auth):
    """
    Given a club admin editing their own membership
    When they replace CLUB_ADMIN with COACH
    Then the change is refused and nothing is written
    """
    auth = make_auth(["CLUB_ADMIN"])
    membership = ClubMembership(club_id=auth.club_id, user_id=auth.user_id, roles=["CLUB_ADMIN"])
    with_membership(roles_uow, membership)

    result = await UpdateMemberRolesUseCase(roles_uow, recorder).execute(auth, membership.id, ["COACH"])

    assert result.error.code == "SELF_DEMOTION"
    roles_uow.memberships.update.assert_not_called()


@pytest.mark.asyncio
async def test_admin_may_add_roles_to_self(roles_uow, recorder, make_auth):
    auth = make_auth(["CLUB_ADMIN"])
    membership = ClubMembership(club_id=auth.club_id, user_id=auth.user_id, roles=["CLUB_ADMIN"])
    with_membership(roles_uow, membership)

    result = await UpdateMemberRolesUseCase(roles_uow, recorder).execute(
        auth, membership.id, ["CLUB_ADMIN", "COACH"]
    )

    assert result.value.roles == ["CLUB_ADMIN", "COACH"]


@pytest.mark.asyncio
async def test_unchanged_roles_are_not_audited(roles_uow, recorder, make_auth):
    auth = make_auth(["CLUB_ADMIN"])
    membership = ClubMembership(club_id=auth.club_id, user_id=uuid4(), roles=["COACH"])
    with_membership(roles_uow, membership)

    await UpdateMemberRolesUseCase(roles_uow, recorder).execute(auth, membership.id, ["COACH"])

    recorder.record.assert_not_called()


@pytest.mark.asyncio
async def test_coach_cannot_assign_roles(roles_uow, recorder, make_auth):
    auth = make_auth(["COACH"])
    membership = ClubMembership(club_id=auth.club_id, user_id=uuid4(), roles=["ATHLETE"])
    with_membership(roles_uow, membership)

    result = await UpdateMemberRolesUseCase(roles_uow, recorder).execute(auth, membership.id, ["COACH"])

    assert result.error.code == "FORBIDDEN"
    assert recorder.record.call_args.args[1].action == AuditAction.PERMISSION_DENIED
