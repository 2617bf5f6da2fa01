"""
Admin API Routes - Platform Administration Endpoints

Super-admin only. There is deliberately no route that creates a super
admin; see scripts/seed_super_admin.py.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from clubauthz.api.error import raise_for_error
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.admin import (
    DeactivateUserUseCase,
    ListSuperAdminsUseCase,
    ReactivateUserUseCase,
)
from clubauthz.app.use_cases.admin.dtos import SuperAdminListResponse, UserStatusResponse
from clubauthz.depends import get_audit_recorder, get_auth_context, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])

USER_STATUS_ERRORS = {
    "CANNOT_MODIFY_SELF": status.HTTP_400_BAD_REQUEST,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class DeactivateUserRequest(BaseModel):
    banned_until: Optional[datetime] = None
    reason: Optional[str] = None


class ReactivateUserRequest(BaseModel):
    reason: Optional[str] = None


@router.post(
    "/users/{user_id}/deactivate",
    status_code=status.HTTP_200_OK,
    response_model=UserStatusResponse,
)
async def deactivate_user(
    user_id: UUID,
    request: DeactivateUserRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Deactivate User

    Soft ban; the user's next request is rejected with 401.

    Raises:
        - 400 Bad Request: CANNOT_MODIFY_SELF
        - 403 Forbidden: not a super admin
        - 404 Not Found: USER_NOT_FOUND
    """
    result = await DeactivateUserUseCase(uow, recorder).execute(
        auth, user_id, banned_until=request.banned_until, reason=request.reason
    )
    if result.is_err():
        raise_for_error(result.error, USER_STATUS_ERRORS)
    return result.value


@router.post(
    "/users/{user_id}/reactivate",
    status_code=status.HTTP_200_OK,
    response_model=UserStatusResponse,
)
async def reactivate_user(
    user_id: UUID,
    request: ReactivateUserRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = await ReactivateUserUseCase(uow, recorder).execute(
        auth, user_id, reason=request.reason
    )
    if result.is_err():
        raise_for_error(result.error, USER_STATUS_ERRORS)
    return result.value


@router.get(
    "/super-admins",
    status_code=status.HTTP_200_OK,
    response_model=SuperAdminListResponse,
)
async def list_super_admins(
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListSuperAdminsUseCase(uow).execute(auth)
    if result.is_err():
        raise_for_error(result.error, {})
    return result.value
