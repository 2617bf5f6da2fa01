"""
SSO API Routes
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from clubauthz.api.error import ClientError, raise_for_error
from clubauthz.api.utils.admin_auth import verify_admin_api_key
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.sso import SyncSsoRolesUseCase, UpdateSsoConfigUseCase
from clubauthz.app.use_cases.sso.dtos import SsoConfigResponse, SsoSyncResponse
from clubauthz.depends import get_audit_recorder, get_auth_context, get_clock, get_unit_of_work
from clubauthz.libs.result import Error

router = APIRouter(prefix="/sso", tags=["SSO"])


class UpdateSsoConfigRequest(BaseModel):
    facility_id: Optional[UUID] = None
    enabled: bool
    provider_id: Optional[str] = None
    idp_domain: Optional[str] = None
    group_claim: str = "groups"
    role_mappings: List[Dict[str, Any]] = Field(default_factory=list)
    default_role: str = "ATHLETE"
    allow_override: bool = True


class SyncSsoRolesRequest(BaseModel):
    club_id: UUID
    user_id: UUID
    claims: Dict[str, Any] = Field(default_factory=dict)


@router.put("/config", status_code=status.HTTP_200_OK, response_model=SsoConfigResponse)
async def update_sso_config(
    request: UpdateSsoConfigRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    clock=Depends(get_clock),
):
    """
    Update SSO Configuration

    Defaults to the facility of the caller's current context.

    Raises:
        - 400 Bad Request: INVALID_ROLE, INVALID_GROUP_CLAIM, INVALID_ROLE_MAPPING
        - 403 Forbidden: caller is not an admin of the facility
        - 404 Not Found: FACILITY_NOT_FOUND
    """
    facility_id = request.facility_id or auth.facility_id
    if facility_id is None:
        raise ClientError(Error("NO_FACILITY_CONTEXT", "Select a facility before configuring SSO"))

    result = await UpdateSsoConfigUseCase(uow, recorder, clock).execute(
        auth,
        facility_id,
        enabled=request.enabled,
        role_mappings=request.role_mappings,
        provider_id=request.provider_id,
        idp_domain=request.idp_domain,
        group_claim=request.group_claim,
        default_role=request.default_role,
        allow_override=request.allow_override,
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
                "INVALID_GROUP_CLAIM": status.HTTP_400_BAD_REQUEST,
                "INVALID_ROLE_MAPPING": status.HTTP_400_BAD_REQUEST,
                "FACILITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
            },
        )
    return result.value


@router.post(
    "/{facility_id}/sync",
    status_code=status.HTTP_200_OK,
    response_model=SsoSyncResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sync_sso_roles(
    facility_id: UUID,
    request: SyncSsoRolesRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Materialise IdP Roles

    Identity-layer endpoint called at SSO login.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: INVALID_SSO_CLAIM, CONTEXT_MISMATCH
        - 401 Unauthorized: missing or invalid admin API key
        - 404 Not Found: CLUB_NOT_FOUND, USER_NOT_FOUND
    """
    result = await SyncSsoRolesUseCase(uow, recorder).execute(
        facility_id, request.club_id, request.user_id, request.claims
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_SSO_CLAIM": status.HTTP_400_BAD_REQUEST,
                "CONTEXT_MISMATCH": status.HTTP_400_BAD_REQUEST,
                "CLUB_NOT_FOUND": status.HTTP_404_NOT_FOUND,
                "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
            },
        )
    return result.value
