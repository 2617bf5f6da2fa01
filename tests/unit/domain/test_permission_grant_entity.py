from datetime import datetime, timedelta
from uuid import uuid4

from clubauthz.domain.entities import ApiKey, PermissionGrant, User

NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_grant(**kwargs):
    defaults = dict(
        club_id=uuid4(),
        user_id=uuid4(),
        granted_by=uuid4(),
        roles=["COACH"],
        expires_at=NOW + timedelta(hours=2),
    )
    defaults.update(kwargs)
    return PermissionGrant(**defaults)


def test_grant_active_strictly_before_expiry():
    grant = make_grant()

    assert grant.is_active(NOW)
    assert grant.is_active(grant.expires_at - timedelta(microseconds=1))


def test_grant_inactive_at_exact_expiry():
    grant = make_grant()

    assert not grant.is_active(grant.expires_at)
    assert not grant.is_active(grant.expires_at + timedelta(seconds=1))


def test_revoked_grant_inactive_from_revocation_on():
    grant = make_grant(revoked_at=NOW)

    assert not grant.is_active(NOW)
    assert not grant.is_active(NOW + timedelta(minutes=30))


def test_user_ban_with_past_until_no_longer_blocks():
    user = User(email="a@example.com", is_banned=True, banned_until=NOW - timedelta(days=1))

    assert not user.is_blocked(NOW)
    assert User(email="b@example.com", is_banned=True).is_blocked(NOW)


def test_api_key_usable_until_revoked_or_expired():
    key = ApiKey(
        club_id=uuid4(), name="ci", key_prefix="ca_abcde", key_hash="x" * 64, created_by=uuid4()
    )
    assert key.is_usable(NOW)

    key.expires_at = NOW
    assert not key.is_usable(NOW)

    key.expires_at = None
    key.revoked_at = NOW
    assert not key.is_usable(NOW)
