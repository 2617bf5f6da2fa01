from datetime import timedelta

import pytest
from httpx import AsyncClient

from clubauthz.domain.entities import AuditLog
from config import ApplicationConfig


@pytest.mark.asyncio
async def test_cron_without_configured_secret_is_server_error(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "CRON_SECRET", "")

    response = await client.post("/api/cron/expire-grants", headers={"Authorization": "Bearer anything"})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CRON_NOT_CONFIGURED"
    assert len(response.json()["error"]["ref"]) == 8


@pytest.mark.asyncio
async def test_cron_with_wrong_secret_is_unauthorized(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "CRON_SECRET", "cron-test-secret")

    missing = await client.post("/api/cron/expire-grants")
    wrong = await client.post("/api/cron/expire-grants", headers={"Authorization": "Bearer guess"})

    assert missing.status_code == 401
    assert wrong.status_code == 401


@pytest.mark.asyncio
async def test_audit_cleanup_deletes_entries_past_retention(client: AsyncClient, seed, clock, recorder, monkeypatch):
    """
    Given one audit entry older than the retention period and one recent entry
    When the cleanup job runs
    Then only the old entry is deleted and the purge itself is audited
    """
    monkeypatch.setattr(ApplicationConfig, "CRON_SECRET", "cron-test-secret")
    for age in (timedelta(days=400), timedelta(days=10)):
        await seed.add(
            AuditLog(
                tenant_id="club-1",
                user_id="user-1",
                action="ROLE_CHANGED",
                target_type="ClubMembership",
                created_at=clock() - age,
            )
        )

    response = await client.post(
        "/api/cron/audit-cleanup", headers={"Authorization": "Bearer cron-test-secret"}
    )

    assert response.status_code == 200
    assert response.json()["deleted"] == 1

    await recorder.drain()
    assert len(await seed.audit_entries("ROLE_CHANGED")) == 1
    purges = await seed.audit_entries("AUDIT_LOGS_PURGED")
    assert len(purges) == 1
    assert purges[0].tenant_id == "PLATFORM"
