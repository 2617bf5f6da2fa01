import logging
from typing import Any, Optional

from clubauthz.app.services.audit_recorder import AuditEvent, AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.entities import AuditAction
from clubauthz.libs.result import Error

logger = logging.getLogger(__name__)


def authorize(
    auth: AuthContext,
    recorder: AuditRecorder,
    action: Action,
    subject: Subject,
    instance: Any = None,
    target_id: Optional[Any] = None,
) -> Optional[Error]:
    """
    Check the ability and return a FORBIDDEN error when denied.

    Denials are audited as PERMISSION_DENIED whenever the tenant is known.
    """
    if auth.ability.can(action, subject, instance):
        return None

    message = f"You do not have permission to {action.value} {subject.value}"
    logger.info(f"Denied {action.value} {subject.value} for user {auth.user_id}")

    if auth.tenant_id is not None:
        recorder.record(
            auth.actor(),
            AuditEvent(
                action=AuditAction.PERMISSION_DENIED,
                target_type=subject.value,
                target_id=str(target_id) if target_id is not None else None,
                metadata={
                    "attempted_action": action.value,
                    "roles": [role.value for role in auth.roles],
                },
            ),
        )
    return Error("FORBIDDEN", message)


def require_club_context(auth: AuthContext) -> Optional[Error]:
    if auth.club_id is None:
        return Error("NO_CLUB_CONTEXT", "Select a club before performing this action")
    return None
