"""
Membership API Routes
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from clubauthz.api.error import raise_for_error
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.members import AddMemberUseCase, UpdateMemberRolesUseCase
from clubauthz.app.use_cases.members.dtos import MembershipResponse
from clubauthz.depends import get_audit_recorder, get_auth_context, get_unit_of_work

router = APIRouter(prefix="/members", tags=["Members"])


class AddMemberRequest(BaseModel):
    user_id: UUID
    roles: List[str]
    club_id: Optional[UUID] = None


class UpdateRolesRequest(BaseModel):
    roles: List[str]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MembershipResponse)
async def add_member(
    request: AddMemberRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Add Member

    Raises:
        - 400 Bad Request: INVALID_ROLES
        - 403 Forbidden: caller cannot invite members
        - 404 Not Found: CLUB_NOT_FOUND, USER_NOT_FOUND
        - 409 Conflict: MEMBER_ALREADY_ACTIVE
    """
    result = await AddMemberUseCase(uow, recorder).execute(
        auth, request.user_id, request.roles, club_id=request.club_id
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_ROLES": status.HTTP_400_BAD_REQUEST,
                "CLUB_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "MEMBER_ALREADY_ACTIVE": status.HTTP_409_CONFLICT,
            },
        )
    return result.value


@router.patch(
    "/{membership_id}/roles",
    status_code=status.HTTP_200_OK,
    response_model=MembershipResponse,
)
async def update_member_roles(
    membership_id: UUID,
    request: UpdateRolesRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Change Member Roles

    Takes effect on the member's next request; no token refresh involved.

    Raises:
        - 400 Bad Request: INVALID_ROLES
        - 403 Forbidden: caller cannot assign roles
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: SELF_DEMOTION
    """
    result = await UpdateMemberRolesUseCase(uow, recorder).execute(
        auth, membership_id, request.roles
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_ROLES": status.HTTP_400_BAD_REQUEST,
                "MEMBERSHIP_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "SELF_DEMOTION": status.HTTP_409_CONFLICT,
            },
        )
    return result.value
