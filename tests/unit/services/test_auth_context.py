from uuid import uuid4

from clubauthz.app.services.api_keys import generate_api_key, hash_api_key
from clubauthz.app.services.audit_recorder import ClientInfo
from clubauthz.app.services.auth_context import ContextHint
from clubauthz.domain.entities import ContextScope


class FakeRequest:
    def __init__(self, headers):
        self.headers = headers


def test_context_hint_round_trips_facility_scope():
    facility_id = uuid4()

    hint = ContextHint.parse(f"facility:{facility_id}")

    assert hint == ContextHint(ContextScope.facility, facility_id)
    assert hint.serialize() == f"facility:{facility_id}"


def test_bare_uuid_hint_is_a_club():
    club_id = uuid4()

    assert ContextHint.parse(str(club_id)) == ContextHint(ContextScope.club, club_id)


def test_garbage_hints_are_ignored():
    assert ContextHint.parse(None) is None
    assert ContextHint.parse("") is None
    assert ContextHint.parse("not-a-uuid") is None
    assert ContextHint.parse(f"galaxy:{uuid4()}") is None


def test_client_info_prefers_first_forwarded_hop():
    client = ClientInfo.from_request(
        FakeRequest(
            {"x-forwarded-for": "203.0.113.7, 10.0.0.1", "x-real-ip": "10.0.0.2", "user-agent": "pytest"}
        )
    )

    assert client.ip_address == "203.0.113.7"
    assert client.user_agent == "pytest"


def test_client_info_falls_back_to_real_ip():
    client = ClientInfo.from_request(FakeRequest({"x-real-ip": "10.0.0.2"}))

    assert client.ip_address == "10.0.0.2"
    assert client.user_agent is None


def test_generated_api_key_matches_its_hash():
    raw_key, prefix, key_hash = generate_api_key()

    assert raw_key.startswith("ca_")
    assert prefix == raw_key[:8]
    assert key_hash == hash_api_key(raw_key)
    assert len(key_hash) == 64
    assert generate_api_key()[0] != raw_key
