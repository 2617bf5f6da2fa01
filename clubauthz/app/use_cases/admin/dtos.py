from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SeedSuperAdminResponse(BaseModel):
    user_id: str
    status: str


class UserStatusResponse(BaseModel):
    user_id: str
    is_banned: bool
    banned_until: Optional[datetime] = None


class SuperAdminResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime


class SuperAdminListResponse(BaseModel):
    super_admins: List[SuperAdminResponse]
