"""
Audit API Routes

Audit log listing and CSV export.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from clubauthz.api.error import raise_for_error
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.audit import ExportAuditLogsUseCase, GetAuditLogsUseCase
from clubauthz.app.use_cases.audit.dtos import AuditLogListResponse
from clubauthz.depends import get_audit_recorder, get_auth_context, get_clock, get_unit_of_work

router = APIRouter(prefix="/audit-logs", tags=["Audit"])

AUDIT_ERRORS = {"INVALID_DATE_RANGE": status.HTTP_400_BAD_REQUEST}


@router.get("", status_code=status.HTTP_200_OK, response_model=AuditLogListResponse)
async def get_audit_logs(
    action: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of entries to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    """
    List Audit Logs

    Returns:
        - entries: newest first, with action descriptions
        - next_cursor: cursor for the next page (null on the last page)

    Raises:
        - 400 Bad Request: INVALID_DATE_RANGE
        - 403 Forbidden: caller cannot view the audit log
    """
    result = await GetAuditLogsUseCase(uow, recorder).execute(
        auth,
        action=action,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        cursor=cursor,
    )
    if result.is_err():
        raise_for_error(result.error, AUDIT_ERRORS)
    return result.value


@router.get("/export", status_code=status.HTTP_200_OK)
async def export_audit_logs(
    action: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    clock=Depends(get_clock),
):
    """CSV export; the export itself is recorded as DATA_EXPORTED"""
    result = await ExportAuditLogsUseCase(uow, recorder, clock).execute(
        auth, action=action, user_id=user_id, start_date=start_date, end_date=end_date
    )
    if result.is_err():
        raise_for_error(result.error, AUDIT_ERRORS)

    export = result.value
    return Response(
        content=export.content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )
