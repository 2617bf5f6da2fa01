from datetime import datetime
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from clubauthz.app.services.auth_context import AuthContext
from clubauthz.domain.ability import TenantContext, build_ability
from clubauthz.domain.entities import ContextScope, Role

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def recorder():
    recorder = MagicMock()
    recorder.record = MagicMock()
    recorder.drain = AsyncMock()
    return recorder


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.publish = AsyncMock()
    return notifier


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_auth():
    """Build an AuthContext for a club (or facility) with the given roles"""

    def _make(
        roles,
        club_id=None,
        user_id=None,
        facility_id=None,
        scope=ContextScope.club,
        is_super_admin=False,
        linked_athlete_ids=(),
    ):
        user_id = user_id or uuid4()
        if scope == ContextScope.club:
            club_id = club_id or uuid4()
        roles = [Role(role) for role in roles]
        tenant_context = TenantContext(
            user_id=user_id,
            scope=scope,
            club_id=club_id,
            facility_id=facility_id,
            linked_athlete_ids=frozenset(str(a) for a in linked_athlete_ids),
        )
        return AuthContext(
            user_id=user_id,
            ability=build_ability(roles, tenant_context, is_super_admin),
            scope=scope,
            club_id=club_id,
            facility_id=facility_id,
            roles=roles,
            is_super_admin=is_super_admin,
        )

    return _make
