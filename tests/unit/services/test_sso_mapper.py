from uuid import uuid4

import pytest
from unittest.mock import AsyncMock

from clubauthz.app.services.sso_mapper import SsoRoleMapper, map_claims
from clubauthz.domain.entities import Role, SsoConfig


def make_config(**kwargs):
    defaults = dict(
        tenant_id=uuid4(),
        enabled=True,
        group_claim="groups",
        role_mappings=[
            {"idp_value": "coaches", "roles": ["COACH"]},
            {"idp_value": "board", "roles": ["CLUB_ADMIN", "COACH"]},
        ],
        default_role="ATHLETE",
    )
    defaults.update(kwargs)
    return SsoConfig(**defaults)


def test_mapped_group_yields_its_roles():
    result = map_claims(make_config(), {"groups": ["coaches"]})

    assert result.is_ok()
    assert result.value == [Role.COACH]


def test_roles_are_deduplicated_in_mapping_order():
    result = map_claims(make_config(), {"groups": ["board", "coaches"]})

    assert result.value == [Role.COACH, Role.CLUB_ADMIN]


def test_unmapped_groups_fall_back_to_default_role():
    result = map_claims(make_config(), {"groups": ["rowers"]})

    assert result.value == [Role.ATHLETE]


def test_string_claim_is_treated_as_single_group():
    result = map_claims(make_config(group_claim="role"), {"role": "coaches"})

    assert result.value == [Role.COACH]


def test_disabled_config_returns_default_role():
    result = map_claims(make_config(enabled=False, default_role="PARENT"), {"groups": ["coaches"]})

    assert result.value == [Role.PARENT]


def test_unknown_role_in_mapping_is_skipped():
    config = make_config(role_mappings=[{"idp_value": "x", "roles": ["WIZARD", "COACH"]}])

    assert map_claims(config, {"groups": ["x"]}).value == [Role.COACH]


def test_malformed_claim_is_an_error():
    result = map_claims(make_config(), {"groups": {"nested": True}})

    assert result.is_err()
    assert result.error.code == "INVALID_SSO_CLAIM"


@pytest.mark.asyncio
async def test_tenant_without_config_gets_athlete(mock_uow):
    mock_uow.sso_configs.get_by_tenant = AsyncMock(return_value=None)

    result = await SsoRoleMapper(mock_uow).map_roles(uuid4(), {"groups": ["coaches"]})

    assert result.value == [Role.ATHLETE]
