import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_super_admin_deactivation_blocks_next_request(client: AsyncClient, seed, auth_headers, recorder):
    """
    Given a super admin and an active user
    When the super admin deactivates the user
    Then the user's existing token is rejected on the next request
    And reactivation restores access
    """
    root = await seed.user()
    await seed.super_admin(root)
    club = await seed.club()
    user = await seed.user()
    await seed.member(club, user, ["COACH"])
    user_headers = auth_headers(user, club)

    assert (await client.get("/api/me/effective-roles", headers=user_headers)).status_code == 200

    response = await client.post(
        f"/api/admin/users/{user.id}/deactivate",
        json={"reason": "Chargeback"},
        headers=auth_headers(root),
    )
    assert response.status_code == 200
    assert response.json()["is_banned"] is True

    assert (await client.get("/api/me/effective-roles", headers=user_headers)).status_code == 401

    response = await client.post(
        f"/api/admin/users/{user.id}/reactivate", json={}, headers=auth_headers(root)
    )
    assert response.status_code == 200
    assert (await client.get("/api/me/effective-roles", headers=user_headers)).status_code == 200

    await recorder.drain()
    deactivations = await seed.audit_entries("ADMIN_USER_DEACTIVATED")
    assert len(deactivations) == 1
    assert deactivations[0].tenant_id == "PLATFORM"
    assert deactivations[0].event_metadata["before_state"]["is_banned"] is False
    assert deactivations[0].event_metadata["after_state"]["is_banned"] is True


@pytest.mark.asyncio
async def test_club_admin_is_not_a_super_admin(client: AsyncClient, seed, auth_headers):
    club = await seed.club()
    admin = await seed.user()
    other = await seed.user()
    await seed.member(club, admin, ["CLUB_ADMIN"])

    response = await client.post(
        f"/api/admin/users/{other.id}/deactivate", json={}, headers=auth_headers(admin, club)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_super_admin_cannot_deactivate_self(client: AsyncClient, seed, auth_headers):
    root = await seed.user()
    await seed.super_admin(root)

    response = await client.post(f"/api/admin/users/{root.id}/deactivate", json={}, headers=auth_headers(root))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_MODIFY_SELF"
