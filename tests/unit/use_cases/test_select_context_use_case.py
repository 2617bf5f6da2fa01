from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.use_cases.context import SelectContextUseCase
from clubauthz.domain.entities import (
    AuditAction,
    Club,
    ClubMembership,
    Facility,
    FacilityMembership,
)

USER = uuid4()
FACILITY = uuid4()


@pytest.fixture
def context_uow(mock_uow):
    mock_uow.super_admins.get_by_user_id = AsyncMock(return_value=None)
    mock_uow.memberships.get_by_user_and_club = AsyncMock(return_value=None)
    mock_uow.memberships.get_legacy = AsyncMock(return_value=None)
    mock_uow.memberships.get_facility_membership = AsyncMock(return_value=None)
    mock_uow.grants.list_active_for_user = AsyncMock(return_value=[])
    return mock_uow


@pytest.mark.asyncio
async def test_selecting_nothing_is_invalid(context_uow, recorder, clock):
    result = await SelectContextUseCase(context_uow, recorder, clock).execute(USER)

    assert result.error.code == "INVALID_CONTEXT"


@pytest.mark.asyncio
async def test_member_selects_club_and_switch_is_audited(context_uow, recorder, clock):
    club = Club(name="River", slug="river", facility_id=FACILITY)
    context_uow.clubs.get_by_id = AsyncMock(return_value=club)
    context_uow.memberships.get_by_user_and_club = AsyncMock(
        return_value=ClubMembership(club_id=club.id, user_id=USER, roles=["COACH"])
    )

    result = await SelectContextUseCase(context_uow, recorder, clock).execute(
        USER, facility_id=FACILITY, club_id=club.id
    )

    assert result.is_ok()
    assert result.value.scope == "club"
    assert result.value.roles == ["COACH"]
    assert result.value.hint == f"club:{club.id}"
    actor, event = recorder.record.call_args.args
    assert event.action == AuditAction.CONTEXT_SWITCHED
    assert actor.tenant_id == str(club.id)


@pytest.mark.asyncio
async def test_non_member_cannot_select_other_club(context_uow, recorder, clock):
    """
    Given a user with no membership in a club
    When they try to select it
    Then the selection is refused and nothing is audited
    """
    club = Club(name="Other", slug="other")
    context_uow.clubs.get_by_id = AsyncMock(return_value=club)

    result = await SelectContextUseCase(context_uow, recorder, clock).execute(USER, club_id=club.id)

    assert result.error.code == "FORBIDDEN"
    recorder.record.assert_not_called()


@pytest.mark.asyncio
async def test_club_outside_facility_is_a_mismatch(context_uow, recorder, clock):
    club = Club(name="Elsewhere", slug="elsewhere", facility_id=uuid4())
    context_uow.clubs.get_by_id = AsyncMock(return_value=club)

    result = await SelectContextUseCase(context_uow, recorder, clock).execute(
        USER, facility_id=FACILITY, club_id=club.id
    )

    assert result.error.code == "CONTEXT_MISMATCH"


@pytest.mark.asyncio
async def test_facility_admin_selects_facility(context_uow, recorder, clock):
    context_uow.clubs.get_facility = AsyncMock(return_value=Facility(id=FACILITY, name="Boathouse", slug="bh"))
    context_uow.memberships.get_facility_membership = AsyncMock(
        return_value=FacilityMembership(facility_id=FACILITY, user_id=USER, roles=["FACILITY_ADMIN"])
    )

    result = await SelectContextUseCase(context_uow, recorder, clock).execute(USER, facility_id=FACILITY)

    assert result.value.scope == "facility"
    assert result.value.roles == ["FACILITY_ADMIN"]
    assert result.value.hint == f"facility:{FACILITY}"


@pytest.mark.asyncio
async def test_facility_member_without_admin_role_is_refused(context_uow, recorder, clock):
    context_uow.clubs.get_facility = AsyncMock(return_value=Facility(id=FACILITY, name="Boathouse", slug="bh"))
    context_uow.memberships.get_facility_membership = AsyncMock(
        return_value=FacilityMembership(facility_id=FACILITY, user_id=USER, roles=[])
    )

    result = await SelectContextUseCase(context_uow, recorder, clock).execute(USER, facility_id=FACILITY)

    assert result.error.code == "FORBIDDEN"
