import csv
import io

import pytest
from httpx import AsyncClient


async def club_with_history(client, seed, auth_headers, recorder):
    club = await seed.club()
    admin = await seed.user()
    coach = await seed.user()
    await seed.member(club, admin, ["CLUB_ADMIN"])
    membership = await seed.member(club, coach, ["ATHLETE"])

    await client.patch(
        f"/api/members/{membership.id}/roles",
        json={"roles": ["COACH"]},
        headers=auth_headers(admin, club),
    )
    await client.post("/api/context/switch", json={"club_id": str(club.id)}, headers=auth_headers(coach))
    await recorder.drain()
    return club, admin, coach


@pytest.mark.asyncio
async def test_admin_lists_club_audit_log(client: AsyncClient, seed, auth_headers, recorder):
    club, admin, coach = await club_with_history(client, seed, auth_headers, recorder)

    response = await client.get("/api/audit-logs", headers=auth_headers(admin, club))

    assert response.status_code == 200
    actions = {entry["action"] for entry in response.json()["entries"]}
    assert actions == {"ROLE_CHANGED", "CONTEXT_SWITCHED"}
    role_change = next(e for e in response.json()["entries"] if e["action"] == "ROLE_CHANGED")
    assert role_change["action_description"] == "Member role changed"


@pytest.mark.asyncio
async def test_coach_sees_only_own_entries(client: AsyncClient, seed, auth_headers, recorder):
    club, admin, coach = await club_with_history(client, seed, auth_headers, recorder)

    response = await client.get("/api/audit-logs", headers=auth_headers(coach, club))

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert [entry["action"] for entry in entries] == ["CONTEXT_SWITCHED"]
    assert entries[0]["user_id"] == str(coach.id)


@pytest.mark.asyncio
async def test_athlete_cannot_read_audit_log(client: AsyncClient, seed, auth_headers):
    club = await seed.club()
    athlete = await seed.user()
    await seed.member(club, athlete, ["ATHLETE"])

    response = await client.get("/api/audit-logs", headers=auth_headers(athlete, club))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_export_returns_csv_and_is_itself_audited(client: AsyncClient, seed, auth_headers, recorder):
    club, admin, coach = await club_with_history(client, seed, auth_headers, recorder)

    response = await client.get(
        "/api/audit-logs/export", params={"action": "ROLE_CHANGED"}, headers=auth_headers(admin, club)
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="audit-logs-2026-03-01.csv"' in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][0] == "ID"
    assert len(rows) == 2
    assert rows[1][2] == "ROLE_CHANGED"

    await recorder.drain()
    exports = await seed.audit_entries("DATA_EXPORTED")
    assert len(exports) == 1
    assert exports[0].event_metadata["record_count"] == 1
    assert exports[0].event_metadata["filters"]["action"] == "ROLE_CHANGED"
