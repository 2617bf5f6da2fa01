"""
Cron API Routes

Invoked by the external scheduler with "Authorization: Bearer <CRON_SECRET>".
Both jobs are safe to run more often than scheduled.
"""

from fastapi import APIRouter, Depends, status

from clubauthz.api.error import raise_for_error
from clubauthz.api.utils.admin_auth import verify_cron_secret
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.notifications import NotificationPublisher
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.audit import PurgeAuditLogsUseCase
from clubauthz.app.use_cases.audit.dtos import PurgeAuditLogsResponse
from clubauthz.app.use_cases.sweeper import ExpireGrantsResponse, ExpireGrantsUseCase
from clubauthz.depends import (
    get_audit_recorder,
    get_clock,
    get_notification_publisher,
    get_unit_of_work,
)
from config import ApplicationConfig

router = APIRouter(
    prefix="/cron",
    tags=["Cron"],
    dependencies=[Depends(verify_cron_secret)],
)


@router.post("/expire-grants", status_code=status.HTTP_200_OK, response_model=ExpireGrantsResponse)
async def expire_grants(
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    notifier: NotificationPublisher = Depends(get_notification_publisher),
    clock=Depends(get_clock),
):
    """
    Grant Expiration Sweep

    Returns:
        - warned: grants that received their expiry warning in this run
        - expired: grants revoked by this run
    """
    result = await ExpireGrantsUseCase(uow, recorder, notifier, clock).execute(
        warning_hours=ApplicationConfig.GRANT_WARNING_HOURS
    )
    if result.is_err():
        raise_for_error(result.error, {})
    return result.value


@router.post("/audit-cleanup", status_code=status.HTTP_200_OK, response_model=PurgeAuditLogsResponse)
async def audit_cleanup(
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    clock=Depends(get_clock),
):
    result = await PurgeAuditLogsUseCase(
        uow, recorder, clock, retention_days=ApplicationConfig.AUDIT_RETENTION_DAYS
    ).execute()
    if result.is_err():
        raise_for_error(result.error, {})
    return result.value
