from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.services.role_resolver import RoleResolver
from clubauthz.domain.entities import (
    Club,
    ClubMembership,
    FacilityMembership,
    Role,
    RoleSource,
    TeamMember,
)

CLUB = uuid4()
USER = uuid4()


def setup_memberships(mock_uow, membership=None, legacy=None):
    mock_uow.memberships.get_by_user_and_club = AsyncMock(return_value=membership)
    mock_uow.memberships.get_legacy = AsyncMock(return_value=legacy)


@pytest.mark.asyncio
async def test_current_membership_is_authoritative(mock_uow):
    """
    Given an active multi-role membership and a legacy row with another role
    When roles are resolved
    Then only the current membership's roles are returned
    """
    setup_memberships(
        mock_uow,
        membership=ClubMembership(club_id=CLUB, user_id=USER, roles=["COACH", "ATHLETE"]),
        legacy=TeamMember(team_id=CLUB, user_id=USER, role="CLUB_ADMIN"),
    )

    resolved = await RoleResolver(mock_uow).resolve_roles(CLUB, USER)

    assert resolved.roles == [Role.COACH, Role.ATHLETE]
    assert resolved.source == RoleSource.membership


@pytest.mark.asyncio
async def test_legacy_row_used_when_no_current_row(mock_uow):
    setup_memberships(mock_uow, legacy=TeamMember(team_id=CLUB, user_id=USER, role="COACH"))

    resolved = await RoleResolver(mock_uow).resolve_roles(CLUB, USER)

    assert resolved.roles == [Role.COACH]
    assert resolved.source == RoleSource.legacy


@pytest.mark.asyncio
async def test_inactive_membership_shadows_legacy_row(mock_uow):
    setup_memberships(
        mock_uow,
        membership=ClubMembership(club_id=CLUB, user_id=USER, roles=["COACH"], is_active=False),
        legacy=TeamMember(team_id=CLUB, user_id=USER, role="COACH"),
    )

    resolved = await RoleResolver(mock_uow).resolve_roles(CLUB, USER)

    assert resolved.roles == []
    assert resolved.source == RoleSource.none
    assert not await RoleResolver(mock_uow).has_membership(CLUB, USER)


@pytest.mark.asyncio
async def test_no_membership_is_empty_not_error(mock_uow):
    setup_memberships(mock_uow)

    resolved = await RoleResolver(mock_uow).resolve_roles(CLUB, USER)

    assert resolved.roles == []
    assert resolved.source == RoleSource.none


@pytest.mark.asyncio
async def test_unknown_stored_role_names_are_skipped(mock_uow):
    setup_memberships(
        mock_uow,
        membership=ClubMembership(club_id=CLUB, user_id=USER, roles=["COACH", "ROWING_GOD"]),
    )

    resolved = await RoleResolver(mock_uow).resolve_roles(CLUB, USER)

    assert resolved.roles == [Role.COACH]


@pytest.mark.asyncio
async def test_facility_admin_inherited_from_club_facility(mock_uow):
    facility_id = uuid4()
    mock_uow.clubs.get_by_id = AsyncMock(
        return_value=Club(id=CLUB, name="River", slug="river", facility_id=facility_id)
    )
    mock_uow.memberships.get_facility_membership = AsyncMock(
        return_value=FacilityMembership(facility_id=facility_id, user_id=USER, roles=["FACILITY_ADMIN"])
    )

    roles = await RoleResolver(mock_uow).facility_roles(CLUB, USER)

    assert roles == [Role.FACILITY_ADMIN]
    mock_uow.memberships.get_facility_membership.assert_called_once_with(USER, facility_id)


@pytest.mark.asyncio
async def test_club_without_facility_contributes_no_facility_roles(mock_uow):
    mock_uow.clubs.get_by_id = AsyncMock(return_value=Club(id=CLUB, name="Solo", slug="solo"))
    mock_uow.memberships.get_facility_membership = AsyncMock()

    assert await RoleResolver(mock_uow).facility_roles(CLUB, USER) == []
    mock_uow.memberships.get_facility_membership.assert_not_called()
