from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.services.notifications import GRANT_EXPIRED, GRANT_EXPIRING
from clubauthz.app.use_cases.sweeper import ExpireGrantsUseCase
from clubauthz.domain.entities import AuditAction, PermissionGrant

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0)


def make_grant(expires_in):
    return PermissionGrant(
        club_id=uuid4(),
        user_id=uuid4(),
        granted_by=uuid4(),
        roles=["COACH"],
        expires_at=FIXED_NOW + expires_in,
    )


@pytest.mark.asyncio
async def test_only_rows_this_run_changed_produce_events(mock_uow, recorder, notifier, clock):
    """
    Given two expiring and two expired grants, one of each already claimed by a concurrent run
    When the sweep runs
    Then one warning and one expiry are emitted, and the expiry is audited as the system actor
    """
    expiring = [make_grant(timedelta(hours=3)), make_grant(timedelta(hours=5))]
    expired = [make_grant(-timedelta(minutes=1)), make_grant(-timedelta(hours=1))]
    mock_uow.grants.get_expiring = AsyncMock(return_value=expiring)
    mock_uow.grants.mark_notified = AsyncMock(return_value=[expiring[0].id])
    mock_uow.grants.get_expired = AsyncMock(return_value=expired)
    mock_uow.grants.bulk_revoke_expired = AsyncMock(return_value=[expired[1].id])

    result = await ExpireGrantsUseCase(mock_uow, recorder, notifier, clock).execute(warning_hours=24)

    assert result.value.warned == 1
    assert result.value.expired == 1
    mock_uow.grants.get_expiring.assert_called_once_with(FIXED_NOW, 24)

    recorder.record.assert_called_once()
    actor, event = recorder.record.call_args.args
    assert actor.user_id == "system"
    assert actor.tenant_id == str(expired[1].club_id)
    assert event.action == AuditAction.PERMISSION_GRANT_EXPIRED
    assert event.target_id == str(expired[1].id)
    assert event.metadata["expired_user_id"] == str(expired[1].user_id)

    published = [call.args[0] for call in notifier.publish.call_args_list]
    assert published == [GRANT_EXPIRING, GRANT_EXPIRED]
    warning = notifier.publish.call_args_list[0].args[1]
    assert warning["grant_id"] == str(expiring[0].id)
    assert warning["hours_remaining"] == 3.0


@pytest.mark.asyncio
async def test_empty_sweep_is_a_no_op(mock_uow, recorder, notifier, clock):
    mock_uow.grants.get_expiring = AsyncMock(return_value=[])
    mock_uow.grants.mark_notified = AsyncMock(return_value=[])
    mock_uow.grants.get_expired = AsyncMock(return_value=[])
    mock_uow.grants.bulk_revoke_expired = AsyncMock(return_value=[])

    result = await ExpireGrantsUseCase(mock_uow, recorder, notifier, clock).execute()

    assert result.value.warned == 0
    assert result.value.expired == 0
    recorder.record.assert_not_called()
    notifier.publish.assert_not_called()


@pytest.mark.asyncio
async def test_warnings_go_out_even_when_expiry_phase_fails(mock_uow, recorder, notifier, clock):
    expiring = [make_grant(timedelta(hours=2))]
    mock_uow.grants.get_expiring = AsyncMock(return_value=expiring)
    mock_uow.grants.mark_notified = AsyncMock(return_value=[expiring[0].id])
    mock_uow.grants.get_expired = AsyncMock(side_effect=RuntimeError("database went away"))

    with pytest.raises(RuntimeError):
        await ExpireGrantsUseCase(mock_uow, recorder, notifier, clock).execute()

    notifier.publish.assert_called_once()
    assert notifier.publish.call_args.args[0] == GRANT_EXPIRING
    assert notifier.publish.call_args.args[1]["grant_id"] == str(expiring[0].id)


@pytest.mark.asyncio
async def test_publish_failures_do_not_skip_expiry_audits(mock_uow, recorder, notifier, clock):
    """
    Given three grants revoked by this sweep and a notifier that always fails
    When the sweep runs
    Then every revoked grant is still audited and the sweep reports all three
    """
    expired = [make_grant(-timedelta(minutes=n)) for n in (1, 2, 3)]
    mock_uow.grants.get_expiring = AsyncMock(return_value=[])
    mock_uow.grants.mark_notified = AsyncMock(return_value=[])
    mock_uow.grants.get_expired = AsyncMock(return_value=expired)
    mock_uow.grants.bulk_revoke_expired = AsyncMock(return_value=[g.id for g in expired])
    notifier.publish = AsyncMock(side_effect=ConnectionError("broker down"))

    result = await ExpireGrantsUseCase(mock_uow, recorder, notifier, clock).execute()

    assert result.value.expired == 3
    audited = [call.args[1].target_id for call in recorder.record.call_args_list]
    assert audited == [str(g.id) for g in expired]
    assert notifier.publish.call_count == 3
