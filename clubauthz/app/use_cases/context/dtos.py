"""
Context Selection DTOs
"""

from typing import List, Optional

from pydantic import BaseModel


class SelectedContext(BaseModel):
    """Result of a successful context switch"""

    scope: str
    tenant_id: str
    facility_id: Optional[str] = None
    club_id: Optional[str] = None
    roles: List[str]
    hint: str


class FacilityOption(BaseModel):
    id: str
    name: str


class ClubOption(BaseModel):
    id: str
    name: str
    facility_id: Optional[str] = None
    roles: List[str]


class AvailableContextsResponse(BaseModel):
    facilities: List[FacilityOption]
    clubs: List[ClubOption]
