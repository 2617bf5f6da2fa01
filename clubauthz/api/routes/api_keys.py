from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from clubauthz.api.error import raise_for_error
from clubauthz.app.services.audit_recorder import AuditRecorder
from clubauthz.app.services.auth_context import AuthContext
from clubauthz.app.services.unit_of_work import UnitOfWork
from clubauthz.app.use_cases.api_keys import (
    CreateApiKeyUseCase,
    ListApiKeysUseCase,
    RevokeApiKeyUseCase,
)
from clubauthz.app.use_cases.api_keys.dtos import (
    ApiKeyCreatedResponse,
    ApiKeyListResponse,
    RevokeApiKeyResponse,
)
from clubauthz.depends import get_audit_recorder, get_auth_context, get_clock, get_unit_of_work

router = APIRouter(prefix="/api-keys", tags=["API Keys"])


class CreateApiKeyRequest(BaseModel):
    name: str
    expires_in_days: Optional[int] = None


@router.get("", status_code=status.HTTP_200_OK, response_model=ApiKeyListResponse)
async def list_api_keys(
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    result = await ListApiKeysUseCase(uow, recorder).execute(auth)
    if result.is_err():
        raise_for_error(result.error, {})
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApiKeyCreatedResponse)
async def create_api_key(
    request: CreateApiKeyRequest,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    clock=Depends(get_clock),
):
    """
    Create API Key

    The raw key is in this response only.

    Raises:
        - 400 Bad Request: INVALID_NAME, INVALID_EXPIRY
        - 403 Forbidden: caller cannot manage API keys
    """
    result = await CreateApiKeyUseCase(uow, recorder, clock).execute(
        auth, request.name, request.expires_in_days
    )
    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_NAME": status.HTTP_400_BAD_REQUEST,
                "INVALID_EXPIRY": status.HTTP_400_BAD_REQUEST,
            },
        )
    return result.value


@router.delete("/{key_id}", status_code=status.HTTP_200_OK, response_model=RevokeApiKeyResponse)
async def revoke_api_key(
    key_id: UUID,
    auth: AuthContext = Depends(get_auth_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    recorder: AuditRecorder = Depends(get_audit_recorder),
    clock=Depends(get_clock),
):
    result = await RevokeApiKeyUseCase(uow, recorder, clock).execute(auth, key_id)
    if result.is_err():
        raise_for_error(result.error, {"API_KEY_NOT_FOUND": status.HTTP_404_NOT_FOUND})
    return result.value
