"""
Permission Grant API Routes
"""

from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from clubauthz.api.error import raise_for_error
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.notifications import NotificationPublisher
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.grants import (
    CreateGrantUseCase,
    ListGrantsUseCase,
    RevokeGrantUseCase,
)
from clubauthz.app.use_cases.grants.dtos import (
    GrantListResponse,
    GrantResponse,
    RevokeGrantResponse,
)
from clubauthz.depends import (
    get_audit_recorder,
    get_auth_context,
    get_clock,
    get_notification_publisher,
    get_unit_of_work,
)
from config import ApplicationConfig

router = APIRouter(prefix="/permission-grants", tags=["Permission Grants"])


class CreateGrantRequest(BaseModel):
    user_id: UUID
    roles: List[str]
    duration: Union[int, float, str]
    reason: Optional[str] = None


@router.get("", status_code=status.HTTP_200_OK, response_model=GrantListResponse)
async def list_grants(
    include_expired: bool = Query(False),
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    clock=Depends(get_clock),
):
    result = await ListGrantsUseCase(uow, recorder, clock).execute(auth, include_expired)
    if result.is_err():
        raise_for_error(result.error, {})
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=GrantResponse)
async def create_grant(
    request: CreateGrantRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    notifier: NotificationPublisher = Depends(get_notification_publisher),
    clock=Depends(get_clock),
):
    """
    Grant Temporary Roles

    Raises:
        - 400 Bad Request: INVALID_ROLES, INVALID_DURATION, DURATION_TOO_LONG
        - 401 Unauthorized: missing or invalid credentials
        - 403 Forbidden: caller cannot grant roles in this club
        - 404 Not Found: MEMBER_NOT_FOUND
    """
    use_case = CreateGrantUseCase(
        uow,
        recorder,
        notifier,
        clock,
        max_duration_hours=ApplicationConfig.GRANT_MAX_DURATION_HOURS,
    )
    result = await use_case.execute(
        auth,
        user_id=request.user_id,
        roles=request.roles,
        duration=request.duration,
        reason=request.reason,
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_ROLES": status.HTTP_400_BAD_REQUEST,
                "INVALID_DURATION": status.HTTP_400_BAD_REQUEST,
                "DURATION_TOO_LONG": status.HTTP_400_BAD_REQUEST,
                "MEMBER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
            },
        )
    return result.value


@router.delete("/{grant_id}", status_code=status.HTTP_200_OK, response_model=RevokeGrantResponse)
async def revoke_grant(
    grant_id: UUID,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    notifier: NotificationPublisher = Depends(get_notification_publisher),
    clock=Depends(get_clock),
):
    """
    Revoke Grant

    Idempotent: revoking an already revoked grant returns status
    "already_revoked".
    """
    result = await RevokeGrantUseCase(uow, recorder, notifier, clock).execute(auth, grant_id)
    if result.is_err():
        raise_for_error(result.error, {"GRANT_NOT_FOUND": status.HTTP_404_NOT_FOUND})
    return result.value
