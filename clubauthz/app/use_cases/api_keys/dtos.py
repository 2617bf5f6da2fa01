from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from clubauthz.domain.entities import ApiKey


class ApiKeyResponse(BaseModel):
    id: str
    club_id: str
    name: str
    key_prefix: str
    created_by: str
    expires_at: Optional[datetime] = None
    last_used_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, api_key: ApiKey) -> "ApiKeyResponse":
        return cls(
            id=str(api_key.id),
            club_id=str(api_key.club_id),
            name=api_key.name,
            key_prefix=api_key.key_prefix,
            created_by=str(api_key.created_by),
            expires_at=api_key.expires_at,
            last_used_at=api_key.last_used_at,
            created_at=api_key.created_at,
        )


class ApiKeyCreatedResponse(ApiKeyResponse):
    """The raw key appears here once and is never retrievable again"""

    key: str


class ApiKeyListResponse(BaseModel):
    api_keys: List[ApiKeyResponse]


class RevokeApiKeyResponse(BaseModel):
    id: str
    status: str
