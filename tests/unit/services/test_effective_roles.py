from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.services.effective_roles import EffectiveRolesService
from clubauthz.domain.entities import ClubMembership, PermissionGrant, Role, RoleSource

CLUB = uuid4()
USER = uuid4()
NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_grant(roles, expires_at=None, revoked_at=None):
    return PermissionGrant(
        club_id=CLUB,
        user_id=USER,
        granted_by=uuid4(),
        roles=roles,
        expires_at=expires_at or NOW + timedelta(hours=2),
        revoked_at=revoked_at,
    )


@pytest.fixture
def athlete_uow(mock_uow):
    mock_uow.memberships.get_by_user_and_club = AsyncMock(
        return_value=ClubMembership(club_id=CLUB, user_id=USER, roles=["ATHLETE"])
    )
    mock_uow.memberships.get_legacy = AsyncMock(return_value=None)
    mock_uow.clubs.get_by_id = AsyncMock(return_value=None)
    mock_uow.grants.list_active_for_user = AsyncMock(return_value=[])
    return mock_uow


@pytest.mark.asyncio
async def test_grant_roles_are_added_to_membership_roles(athlete_uow):
    """
    Given an ATHLETE membership and an active COACH grant
    When effective roles are computed
    Then the result is ATHLETE plus COACH and the sources are reported separately
    """
    athlete_uow.grants.list_active_for_user = AsyncMock(return_value=[make_grant(["COACH"])])

    effective = await EffectiveRolesService(athlete_uow).effective_roles(CLUB, USER, now=NOW)

    assert effective.roles == [Role.COACH, Role.ATHLETE]
    assert effective.membership_roles == [Role.ATHLETE]
    assert effective.granted_roles == [Role.COACH]
    assert effective.source == RoleSource.membership


@pytest.mark.asyncio
async def test_grant_duplicating_membership_role_does_not_duplicate(athlete_uow):
    athlete_uow.grants.list_active_for_user = AsyncMock(
        return_value=[make_grant(["ATHLETE"]), make_grant(["ATHLETE", "COACH"])]
    )

    effective = await EffectiveRolesService(athlete_uow).effective_roles(CLUB, USER, now=NOW)

    assert effective.roles == [Role.COACH, Role.ATHLETE]


@pytest.mark.asyncio
async def test_grant_at_expiry_instant_contributes_nothing(athlete_uow):
    athlete_uow.grants.list_active_for_user = AsyncMock(
        return_value=[make_grant(["COACH"], expires_at=NOW)]
    )

    effective = await EffectiveRolesService(athlete_uow).effective_roles(CLUB, USER, now=NOW)

    assert effective.roles == [Role.ATHLETE]
    assert effective.granted_roles == []


@pytest.mark.asyncio
async def test_clock_is_used_when_now_is_not_given(athlete_uow):
    service = EffectiveRolesService(athlete_uow, clock=lambda: NOW)

    await service.effective_roles(CLUB, USER)

    athlete_uow.grants.list_active_for_user.assert_called_once_with(CLUB, USER, NOW)


@pytest.mark.asyncio
async def test_user_with_nothing_has_empty_roles(mock_uow):
    mock_uow.memberships.get_by_user_and_club = AsyncMock(return_value=None)
    mock_uow.memberships.get_legacy = AsyncMock(return_value=None)
    mock_uow.clubs.get_by_id = AsyncMock(return_value=None)
    mock_uow.grants.list_active_for_user = AsyncMock(return_value=[])

    effective = await EffectiveRolesService(mock_uow).effective_roles(CLUB, USER, now=NOW)

    assert effective.is_empty
    assert effective.source == RoleSource.none
