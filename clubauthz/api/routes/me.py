from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from clubauthz.app.services.auth_context import AuthContext, ContextHint
from clubauthz.depends import get_auth_context
from config import ApplicationConfig

router = APIRouter(prefix="/me", tags=["Me"])


class EffectiveRolesResponse(BaseModel):
    """GET /me/effective-roles response payload"""

    user_id: str
    scope: Optional[str] = None
    club_id: Optional[str] = None
    facility_id: Optional[str] = None
    roles: List[str]
    is_super_admin: bool
    was_recovered: bool


@router.get(
    "/effective-roles",
    status_code=status.HTTP_200_OK,
    response_model=EffectiveRolesResponse,
)
async def get_effective_roles(
    response: Response,
    auth: AuthContext = Depends(get_auth_context),
):
    """
    Effective roles of the caller in the resolved context.

    Recomputed from storage on every call. When the remembered context was
    no longer valid, the cookie is replaced with the fallback context.

    Raises:
        - 401 Unauthorized: missing or invalid credentials
    """
    if auth.was_recovered and auth.tenant_id is not None and auth.api_key_id is None:
        response.set_cookie(
            ApplicationConfig.CONTEXT_COOKIE_NAME,
            ContextHint(auth.scope, auth.tenant_id).serialize(),
            httponly=True,
            samesite="lax",
        )

    return EffectiveRolesResponse(
        user_id=str(auth.user_id),
        scope=auth.scope.value if auth.scope else None,
        club_id=str(auth.club_id) if auth.club_id else None,
        facility_id=str(auth.facility_id) if auth.facility_id else None,
        roles=[role.value for role in auth.roles],
        is_super_admin=auth.is_super_admin,
        was_recovered=auth.was_recovered,
    )
