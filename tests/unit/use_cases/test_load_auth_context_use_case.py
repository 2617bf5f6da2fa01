from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.services.auth_context import ContextHint
from clubauthz.app.use_cases.auth import LoadAuthContextUseCase
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.entities import Club, ClubMembership, ContextScope, Role, SuperAdmin, User

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0)

USER = uuid4()
HOME = Club(name="Home", slug="home")
AWAY = Club(name="Away", slug="away")


@pytest.fixture
def coach_uow(mock_uow):
    clubs = {HOME.id: HOME, AWAY.id: AWAY}
    home_membership = ClubMembership(club_id=HOME.id, user_id=USER, roles=["COACH"])
    mock_uow.users.get_by_id = AsyncMock(return_value=User(id=USER, email="coach@example.com"))
    mock_uow.super_admins.get_by_user_id = AsyncMock(return_value=None)
    mock_uow.clubs.get_by_id = AsyncMock(side_effect=lambda club_id: clubs.get(club_id))
    mock_uow.memberships.get_by_user_and_club = AsyncMock(
        side_effect=lambda user_id, club_id: home_membership if club_id == HOME.id else None
    )
    mock_uow.memberships.get_legacy = AsyncMock(return_value=None)
    mock_uow.memberships.get_active_by_user = AsyncMock(return_value=[home_membership])
    mock_uow.grants.list_active_for_user = AsyncMock(return_value=[])
    return mock_uow


@pytest.mark.asyncio
async def test_valid_hint_is_honoured(coach_uow, clock):
    result = await LoadAuthContextUseCase(coach_uow, clock).execute(
        USER, ContextHint(ContextScope.club, HOME.id)
    )

    auth = result.value
    assert auth.club_id == HOME.id
    assert auth.roles == [Role.COACH]
    assert not auth.was_recovered
    assert auth.ability.can(Action.create, Subject.Practice, {"team_id": HOME.id})


@pytest.mark.asyncio
async def test_stale_hint_falls_back_to_first_membership(coach_uow, clock):
    """
    Given a remembered context for a club the user no longer belongs to
    When the context is loaded
    Then it falls back to the user's first active membership and flags the recovery
    """
    result = await LoadAuthContextUseCase(coach_uow, clock).execute(
        USER, ContextHint(ContextScope.club, AWAY.id)
    )

    auth = result.value
    assert auth.club_id == HOME.id
    assert auth.was_recovered


@pytest.mark.asyncio
async def test_pinned_hint_never_falls_back(coach_uow, clock):
    result = await LoadAuthContextUseCase(coach_uow, clock).execute(
        USER, ContextHint(ContextScope.club, AWAY.id), pinned=True
    )

    auth = result.value
    assert auth.club_id == AWAY.id
    assert auth.roles == []
    assert auth.ability.cannot(Action.read, Subject.Practice, {"team_id": AWAY.id})


@pytest.mark.asyncio
async def test_banned_user_is_unauthorized(coach_uow, clock):
    coach_uow.users.get_by_id = AsyncMock(
        return_value=User(id=USER, email="coach@example.com", is_banned=True, banned_until=FIXED_NOW + timedelta(days=1))
    )

    result = await LoadAuthContextUseCase(coach_uow, clock).execute(USER)

    assert result.error.code == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_user_without_any_membership_gets_empty_context(coach_uow, clock):
    coach_uow.memberships.get_active_by_user = AsyncMock(return_value=[])
    coach_uow.memberships.get_legacy_by_user = AsyncMock(return_value=[])
    coach_uow.memberships.get_facility_memberships_by_user = AsyncMock(return_value=[])

    result = await LoadAuthContextUseCase(coach_uow, clock).execute(USER)

    auth = result.value
    assert auth.club_id is None
    assert auth.roles == []
    assert auth.ability.cannot(Action.read, Subject.Practice)


@pytest.mark.asyncio
async def test_api_key_request_drops_super_admin_bypass(coach_uow, clock):
    """
    Given a super admin who coaches HOME
    When a context is loaded for one of their API keys
    Then only the HOME club roles apply
    """
    coach_uow.super_admins.get_by_user_id = AsyncMock(return_value=SuperAdmin(user_id=USER))

    result = await LoadAuthContextUseCase(coach_uow, clock).execute(
        USER, ContextHint(ContextScope.club, HOME.id), pinned=True, api_key_id=uuid4()
    )

    auth = result.value
    assert not auth.is_super_admin
    assert auth.roles == [Role.COACH]
    assert auth.ability.cannot(Action.read, Subject.Practice, {"team_id": AWAY.id})
    assert auth.ability.cannot(Action.manage_api_keys, Subject.ApiKey, {"club_id": HOME.id})


@pytest.mark.asyncio
async def test_super_admin_session_keeps_bypass(coach_uow, clock):
    coach_uow.super_admins.get_by_user_id = AsyncMock(return_value=SuperAdmin(user_id=USER))

    result = await LoadAuthContextUseCase(coach_uow, clock).execute(
        USER, ContextHint(ContextScope.club, HOME.id)
    )

    assert result.value.is_super_admin
    assert result.value.ability.can(Action.read, Subject.Practice, {"team_id": AWAY.id})
