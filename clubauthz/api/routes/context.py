"""
Context API Routes

Listing and switching the club or facility a user acts in.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from clubauthz.api.error import raise_for_error
from clubauthz.app.services.audit_recorder import AuditRecorder, ClientInfo
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.context import ListAvailableContextsUseCase, SelectContextUseCase
from clubauthz.app.use_cases.context.dtos import AvailableContextsResponse, SelectedContext
from clubauthz.depends import (
    get_audit_recorder,
    get_client_info,
    get_clock,
    get_current_user,
    get_unit_of_work,
)
from config import ApplicationConfig

router = APIRouter(prefix="/context", tags=["Context"])


class SwitchContextRequest(BaseModel):
    facility_id: Optional[UUID] = None
    club_id: Optional[UUID] = None


@router.get(
    "/available",
    status_code=status.HTTP_200_OK,
    response_model=AvailableContextsResponse,
)
async def list_available_contexts(
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListAvailableContextsUseCase(uow).execute(user_id)
    if result.is_err():
        raise_for_error(result.error, {})
    return result.value


@router.post(
    "/switch",
    status_code=status.HTTP_200_OK,
    response_model=SelectedContext,
)
async def switch_context(
    request: SwitchContextRequest,
    response: Response,
    user_id: UUID = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    client: ClientInfo = Depends(get_client_info),
    clock=Depends(get_clock),
):
    """
    Switch Active Context

    Membership is verified before the scope is granted; the cookie set here
    is only a hint that is re-verified on every request.

    Raises:
        - 400 Bad Request: INVALID_CONTEXT, CONTEXT_MISMATCH
        - 401 Unauthorized: missing or invalid credentials
        - 403 Forbidden: not a member / not a facility admin
    """
    use_case = SelectContextUseCase(uow, recorder, clock)
    result = await use_case.execute(
        user_id, facility_id=request.facility_id, club_id=request.club_id, client=client
    )

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_CONTEXT": status.HTTP_400_BAD_REQUEST,
                "CONTEXT_MISMATCH": status.HTTP_400_BAD_REQUEST,
            },
        )

    selected = result.value
    response.set_cookie(
        ApplicationConfig.CONTEXT_COOKIE_NAME,
        selected.hint,
        httponly=True,
        samesite="lax",
    )
    return selected
