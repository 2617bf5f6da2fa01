"""
Audit visibility

Admins of a club see the club's log, facility admins see the facility and
its clubs, coaches see their own entries, super admins see everything.
"""

from datetime import datetime
from typing import Optional

from clubauthz.app.repositories.audit_log_repository import AuditLogFilter
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.authorization import authorize
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.domain.ability import Action, Subject
from clubauthz.domain.entities import ContextScope
from clubauthz.libs.result import Error, Result, Return


async def resolve_audit_filter(
    uow: UnitOfWork,
    recorder: AuditRecorder,
    auth: AuthContext,
    action: Optional[str] = None,
    user_id: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Result[AuditLogFilter]:
    """Must be called inside an entered unit of work"""
    filters = AuditLogFilter(
        action=action, user_id=user_id, start_date=start_date, end_date=end_date
    )
    if start_date and end_date and start_date > end_date:
        return Return.err(Error("INVALID_DATE_RANGE", "start_date must be before end_date"))

    if auth.is_super_admin and auth.tenant_id is None:
        return Return.ok(filters)

    if auth.tenant_id is None:
        return Return.err(Error("NO_CLUB_CONTEXT", "Select a club before performing this action"))

    tenant = str(auth.tenant_id)
    scope = {"tenant_id": tenant, "facility_id": auth.facility_id}
    if auth.ability.can(Action.view_audit_log, Subject.AuditLog, scope):
        tenant_ids = [tenant]
        if auth.scope == ContextScope.facility:
            clubs = await uow.clubs.get_by_facility(auth.facility_id)
            tenant_ids.extend(str(club.id) for club in clubs)
        filters.tenant_ids = tenant_ids
        return Return.ok(filters)

    own = {**scope, "user_id": str(auth.user_id)}
    error = authorize(auth, recorder, Action.view_audit_log, Subject.AuditLog, own)
    if error:
        return Return.err(error)
    filters.tenant_ids = [tenant]
    filters.user_id = str(auth.user_id)
    return Return.ok(filters)
