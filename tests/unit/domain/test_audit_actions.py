from clubauthz.domain.entities import AUDIT_ACTION_DESCRIPTIONS, AuditAction


def test_every_audit_action_has_a_description():
    assert set(AUDIT_ACTION_DESCRIPTIONS) == set(AuditAction)


def test_audit_actions_are_the_recorded_set():
    assert {action.value for action in AuditAction} == {
        "ROLE_CHANGED",
        "MEMBER_INVITED",
        "DATA_EXPORTED",
        "API_KEY_CREATED",
        "API_KEY_REVOKED",
        "CONTEXT_SWITCHED",
        "PERMISSION_GRANT_CREATED",
        "PERMISSION_GRANT_REVOKED",
        "PERMISSION_GRANT_EXPIRED",
        "PERMISSION_DENIED",
        "SSO_CONFIG_UPDATED",
        "SSO_ENABLED",
        "SSO_DISABLED",
        "SSO_ROLE_MAPPING_CHANGED",
        "ADMIN_USER_DEACTIVATED",
        "ADMIN_USER_REACTIVATED",
        "AUDIT_LOGS_PURGED",
    }
